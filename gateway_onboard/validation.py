"""Up-front validation of the caller's onboarding inputs."""

from __future__ import annotations

import math
from typing import Any, List, Optional, Tuple

from .errors import DomainError
from .types import ModelIdentity, PriceQuote


def _as_price(label: str, value: Any, problems: List[str]) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        problems.append(f"{label} must not be empty")
        return None
    if isinstance(value, bool):
        problems.append(f"{label} must be a number")
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        problems.append(f"{label} must be a number, got {value!r}")
        return None
    if not math.isfinite(price):
        problems.append(f"{label} must be finite")
        return None
    if price < 0:
        problems.append(f"{label} must not be negative")
        return None
    return price


def validate_inputs(
    source_base_url: str,
    source_token: str,
    source_model_name: str,
    gateway_model_name: str,
    input_price_per_million: Any,
    output_price_per_million: Any,
) -> Tuple[ModelIdentity, PriceQuote]:
    """
    Check all onboarding inputs and build the domain objects.

    Every problem is collected first and reported in a single DomainError,
    so a caller can fix the whole form in one go.
    """
    problems: List[str] = []

    base_url = (source_base_url or "").strip()
    if not base_url:
        problems.append("source base URL must not be empty")
    elif not base_url.startswith(("http://", "https://")):
        problems.append("source base URL must start with http:// or https://")

    if not (source_token or "").strip():
        problems.append("source token must not be empty")
    if not (source_model_name or "").strip():
        problems.append("source model name must not be empty")
    if not (gateway_model_name or "").strip():
        problems.append("gateway model name must not be empty")

    input_price = _as_price("input price", input_price_per_million, problems)
    output_price = _as_price("output price", output_price_per_million, problems)
    if input_price == 0:
        problems.append("input price must be greater than zero (it is the completion ratio divisor)")

    if problems:
        raise DomainError("invalid onboarding input: " + "; ".join(problems))

    identity = ModelIdentity(
        source_name=source_model_name.strip(),
        gateway_name=gateway_model_name.strip(),
        source_base_url=base_url,
    )
    quote = PriceQuote(input_price, output_price)
    return identity, quote
