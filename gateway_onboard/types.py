from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import DomainError

# A ratio table as parsed from the gateway: model name -> numeric ratio.
# Plain dicts keep insertion order, which is preserved on write.
RatioTable = Dict[str, Any]


@dataclass(frozen=True)
class PriceQuote:
    """Raw USD prices per 1M tokens for the model being onboarded."""

    input_price_per_million: float
    output_price_per_million: float

    def __post_init__(self) -> None:
        for name in ("input_price_per_million", "output_price_per_million"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DomainError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise DomainError(f"{name} must be finite and non-negative, got {value!r}")


@dataclass(frozen=True)
class ModelIdentity:
    source_name: str  # name used by the upstream provider
    gateway_name: str  # name the gateway exposes to its clients
    source_base_url: str

    def __post_init__(self) -> None:
        if not (self.source_name or "").strip():
            raise DomainError("source_name must not be empty")
        if not (self.gateway_name or "").strip():
            raise DomainError("gateway_name must not be empty")


@dataclass(frozen=True)
class ChannelDescriptor:
    display_name: str
    model_mapping: Dict[str, str]
    model_list: Tuple[str, ...]


@dataclass(frozen=True)
class OptionEntry:
    key: str
    value: str


@dataclass(frozen=True)
class ParseIssue:
    key: str
    issue: str  # "missing" | "invalid_json" | "not_object"
    message: str
    raw: Optional[str] = None


@dataclass
class TableFetch:
    """Result of looking up one ratio table: either a parsed table or an issue."""

    key: str
    table: Optional[RatioTable] = None
    issue: Optional[ParseIssue] = None

    @property
    def present(self) -> bool:
        return self.table is not None


@dataclass(frozen=True)
class DerivedRatios:
    completion_ratio: float
    model_ratio: float


@dataclass(frozen=True)
class PublishResult:
    key: str
    status: str  # "updated" | "failed" | "skipped"
    error: Optional[str] = None


@dataclass
class SyncOutcome:
    """Everything a run produced; the authoritative tables now live on the gateway."""

    channel_name: str
    ratios: DerivedRatios
    completion: TableFetch
    model: TableFetch
    publishes: List[PublishResult] = field(default_factory=list)
    changes: Dict[str, Dict[str, Tuple[Any, Any]]] = field(default_factory=dict)

    @property
    def completion_ratio(self) -> Optional[RatioTable]:
        return self.completion.table

    @property
    def model_ratio(self) -> Optional[RatioTable]:
        return self.model.table

    @property
    def issues(self) -> List[ParseIssue]:
        return [f.issue for f in (self.completion, self.model) if f.issue is not None]

    @property
    def failed_publishes(self) -> List[PublishResult]:
        return [p for p in self.publishes if p.status == "failed"]

    @property
    def ok(self) -> bool:
        return not self.failed_publishes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "channel_name": self.channel_name,
            "derived": {
                "completion_ratio": self.ratios.completion_ratio,
                "model_ratio": self.ratios.model_ratio,
            },
            "completion_ratio": self.completion_ratio,
            "model_ratio": self.model_ratio,
            "issues": [
                {"key": i.key, "issue": i.issue, "message": i.message} for i in self.issues
            ],
            "publishes": [
                {"key": p.key, "status": p.status, "error": p.error} for p in self.publishes
            ],
        }


__all__ = [
    "RatioTable",
    "PriceQuote",
    "ModelIdentity",
    "ChannelDescriptor",
    "OptionEntry",
    "ParseIssue",
    "TableFetch",
    "DerivedRatios",
    "PublishResult",
    "SyncOutcome",
]
