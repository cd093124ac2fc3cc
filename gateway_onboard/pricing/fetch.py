# gateway_onboard/pricing/fetch.py
from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, Iterable, Optional, Tuple

from ..config import COMPLETION_RATIO_KEY, MODEL_RATIO_KEY
from ..types import OptionEntry, ParseIssue, TableFetch

_LOGGER = logging.getLogger(__name__)

RATIO_KEYS = (COMPLETION_RATIO_KEY, MODEL_RATIO_KEY)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _strict_float(text: str) -> float:
    value = float(text)
    # 1e400 parses to inf; writing it back would not be valid JSON
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def parse_ratio_table(key: str, raw: str) -> TableFetch:
    """
    Parse one option value into a ratio table.

    Only strict JSON is accepted: NaN/Infinity and numbers that overflow a
    float make the whole table invalid, so it is never written back.
    Never raises: a bad value becomes a ParseIssue on the returned TableFetch.
    """
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant, parse_float=_strict_float)
    except ValueError as ex:
        issue = ParseIssue(key, "invalid_json", f"Failed to parse {key} JSON: {ex}", raw)
        return TableFetch(key=key, issue=issue)

    if not isinstance(parsed, dict):
        issue = ParseIssue(
            key,
            "not_object",
            f"{key} is not a JSON object (got {type(parsed).__name__})",
            raw,
        )
        return TableFetch(key=key, issue=issue)

    return TableFetch(key=key, table=parsed)


def extract_ratio_tables(entries: Iterable[OptionEntry]) -> Tuple[TableFetch, TableFetch]:
    """
    Pick CompletionRatio and ModelRatio out of the gateway option list.

    Returns (completion, model). If the gateway ever repeats a key, the
    last occurrence wins. A key with an unparsable value is treated the
    same as a missing key: the table is absent and the issue is recorded.
    """
    found: Dict[str, Optional[TableFetch]] = {k: None for k in RATIO_KEYS}

    for entry in entries:
        if entry.key in found:
            found[entry.key] = parse_ratio_table(entry.key, entry.value)

    results = []
    for key in RATIO_KEYS:
        fetch = found[key]
        if fetch is None:
            fetch = TableFetch(
                key=key,
                issue=ParseIssue(key, "missing", f"{key} key not found in response"),
            )
        if fetch.issue is not None:
            _LOGGER.warning("%s", fetch.issue.message)
            if fetch.issue.raw is not None:
                _LOGGER.warning("Raw value: %s", fetch.issue.raw)
        else:
            _LOGGER.info("%s found and parsed (%d entries)", key, len(fetch.table))
        results.append(fetch)

    return results[0], results[1]
