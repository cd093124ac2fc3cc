# gateway_onboard/pricing/ratios.py
"""
Ratio derivation and merging.

The gateway bills a request as

    input_tokens * ModelRatio * base + output_tokens * ModelRatio * CompletionRatio * base

so, from raw USD prices per 1M tokens:

    CompletionRatio = output_price / input_price
    ModelRatio      = input_price / MODEL_RATIO_BASELINE

Both values are written under the source model name AND the gateway
model name, so billing works whichever alias a request resolves to.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional, Tuple

from ..config import MODEL_RATIO_BASELINE
from ..errors import DomainError
from ..types import DerivedRatios, ModelIdentity, PriceQuote, RatioTable, TableFetch

_LOGGER = logging.getLogger(__name__)


def completion_ratio_for(quote: PriceQuote) -> float:
    if quote.input_price_per_million == 0:
        raise DomainError(
            "completion ratio is undefined for a zero input price "
            "(output_price / input_price)"
        )
    return quote.output_price_per_million / quote.input_price_per_million


def model_ratio_for(quote: PriceQuote, baseline: Optional[float] = None) -> float:
    baseline = MODEL_RATIO_BASELINE if baseline is None else baseline
    if not math.isfinite(baseline) or baseline <= 0:
        raise DomainError(f"model ratio baseline must be positive and finite, got {baseline!r}")
    return quote.input_price_per_million / baseline


def derive_ratios(quote: PriceQuote, baseline: Optional[float] = None) -> DerivedRatios:
    ratios = DerivedRatios(
        completion_ratio=completion_ratio_for(quote),
        model_ratio=model_ratio_for(quote, baseline),
    )
    if not (math.isfinite(ratios.completion_ratio) and math.isfinite(ratios.model_ratio)):
        raise DomainError(f"derived ratios are out of range: {ratios}")
    _LOGGER.info(
        "Derived ratios: completion=%.4f model=%.4f",
        ratios.completion_ratio,
        ratios.model_ratio,
    )
    return ratios


def merge_ratio(table: RatioTable, identity: ModelIdentity, value: float) -> RatioTable:
    """Set `value` for both model aliases in place. No other key is touched."""
    table[identity.source_name] = value
    table[identity.gateway_name] = value
    return table


def merge_fetched(fetch: TableFetch, identity: ModelIdentity, value: float) -> TableFetch:
    # An absent table stays absent; it is never rebuilt from scratch.
    if fetch.table is not None:
        merge_ratio(fetch.table, identity, value)
    return fetch


_MISSING = object()


def ratio_changes(before: RatioTable, after: RatioTable) -> Dict[str, Tuple[Any, Any]]:
    """
    Keys whose value differs between two snapshots, as {key: (old, new)}.
    A key absent from `before` has old value None.
    """
    changes: Dict[str, Tuple[Any, Any]] = {}
    for key, new in after.items():
        old = before.get(key, _MISSING)
        if old is _MISSING:
            changes[key] = (None, new)
        elif old != new:
            changes[key] = (old, new)
    return changes
