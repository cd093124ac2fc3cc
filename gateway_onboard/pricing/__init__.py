from .fetch import extract_ratio_tables, parse_ratio_table
from .publish import publish_tables, serialize_table
from .ratios import (
    completion_ratio_for,
    derive_ratios,
    merge_fetched,
    merge_ratio,
    model_ratio_for,
    ratio_changes,
)

__all__ = [
    "extract_ratio_tables",
    "parse_ratio_table",
    "publish_tables",
    "serialize_table",
    "completion_ratio_for",
    "derive_ratios",
    "merge_fetched",
    "merge_ratio",
    "model_ratio_for",
    "ratio_changes",
]
