# gateway_onboard/channel/descriptor.py
from __future__ import annotations

import json
import re
from typing import Any, Dict

from ..config import CHANNEL_CONFIG_FIELDS, CHANNEL_TYPE, DEFAULT_GROUP
from ..types import ChannelDescriptor, ModelIdentity

_SCHEME_RE = re.compile(r"^https?://")


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def extract_host(base_url: str) -> str:
    """
    Host segment of a base URL, used only for the channel display name.
    "https://api.example.com/v1" -> "api.example.com"
    Anything that yields an empty host falls back to the raw string.
    """
    host = _SCHEME_RE.sub("", base_url or "").split("/")[0]
    return host or base_url


def build_channel_descriptor(identity: ModelIdentity) -> ChannelDescriptor:
    host = extract_host(identity.source_base_url)
    return ChannelDescriptor(
        display_name=f"{host} {identity.source_name} -> {identity.gateway_name}",
        model_mapping={identity.gateway_name: identity.source_name},
        model_list=(identity.source_name, identity.gateway_name),
    )


def build_channel_payload(
    descriptor: ChannelDescriptor,
    identity: ModelIdentity,
    source_token: str,
) -> Dict[str, Any]:
    """Body for POST /api/channel/. model_mapping and config are JSON strings."""
    return {
        "name": descriptor.display_name,
        "type": CHANNEL_TYPE,
        "key": source_token,
        "base_url": identity.source_base_url,
        "other": "",
        "model_mapping": _compact_json(descriptor.model_mapping),
        "system_prompt": "",
        "models": ",".join(descriptor.model_list),
        "groups": [DEFAULT_GROUP],
        "group": DEFAULT_GROUP,
        "config": _compact_json({name: "" for name in CHANNEL_CONFIG_FIELDS}),
    }
