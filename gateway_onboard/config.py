#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
config.py

Configuration constants and defaults for the gateway onboarding tool.

Everything here is read once at import time from the environment, so a
CLI flag or an explicit function argument is the way to override a value
for a single run.

Key idea: the gateway owns two service-wide JSON tables
-------------------------------------------------------
- CompletionRatio: output-token price relative to input-token price.
- ModelRatio: input-token price relative to a reference model price.

Both live in the gateway's option store as JSON-encoded strings and are
shared by every model the gateway serves.
"""

import logging
import os

_LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Gateway endpoints
# ---------------------------------------------------------------------
# GATEWAY_BASE_URL:
# - Root of the gateway's admin API. The paths below are fixed.
GATEWAY_BASE_URL = os.getenv("GATEWAY_ONBOARD_BASE_URL", "https://api.llm.ai.vn").rstrip("/")

CHANNEL_PATH = "/api/channel/"
OPTION_PATH = "/api/option/"

# ---------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------
# SYSTEM_TOKEN is the gateway admin access token.
# DEFAULT_SYSTEM_TOKEN is only a placeholder so the tool can start;
# the gateway will reject it. Always set SYSTEM_TOKEN in production.
SYSTEM_TOKEN_ENV = "SYSTEM_TOKEN"
DEFAULT_SYSTEM_TOKEN = "change-me-system-token"

# ---------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------
# MODEL_RATIO_BASELINE:
# - USD price per 1M input tokens that maps to ModelRatio == 1.
# - 2.5 matches the gateway's default pricing scale. Override it if the
#   gateway is reconfigured with a different reference model.
MODEL_RATIO_BASELINE = float(os.getenv("GATEWAY_ONBOARD_MODEL_RATIO_BASELINE", "2.5"))

COMPLETION_RATIO_KEY = "CompletionRatio"
MODEL_RATIO_KEY = "ModelRatio"

# Tables are written one after another in this order.
PUBLISH_ORDER = (MODEL_RATIO_KEY, COMPLETION_RATIO_KEY)

# ---------------------------------------------------------------------
# Channel defaults
# ---------------------------------------------------------------------
# CHANNEL_TYPE 50 is the gateway's OpenAI-compatible custom upstream.
CHANNEL_TYPE = 50
DEFAULT_GROUP = "default"

# Provider-specific config blob sent with every channel; all fields empty.
CHANNEL_CONFIG_FIELDS = (
    "region",
    "sk",
    "ak",
    "user_id",
    "vertex_ai_project_id",
    "vertex_ai_adc",
)

# ---------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------
HTTP_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_ONBOARD_HTTP_TIMEOUT", "60"))
HTTP_CONNECT_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_ONBOARD_CONNECT_TIMEOUT", "10"))

# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------
DEFAULT_LOG_LEVEL = os.getenv("GATEWAY_ONBOARD_LOG_LEVEL", "INFO")


def resolve_system_token() -> str:
    """
    Return SYSTEM_TOKEN from the environment, or the placeholder fallback.

    A warning is logged whenever the fallback is used.
    """
    token = (os.getenv(SYSTEM_TOKEN_ENV) or "").strip()
    if token:
        return token
    _LOGGER.warning(
        "%s is not set; falling back to the placeholder token. "
        "The gateway will most likely reject this run.",
        SYSTEM_TOKEN_ENV,
    )
    return DEFAULT_SYSTEM_TOKEN


def mask_secret(value: str) -> str:
    """Keep the last 4 characters of a secret for log correlation."""
    value = value or ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]
