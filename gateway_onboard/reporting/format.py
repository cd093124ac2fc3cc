from typing import Any, List

from ..config import PUBLISH_ORDER
from ..types import SyncOutcome

_STATUS_ICONS = {"updated": "✅", "failed": "❌", "skipped": "⚠️"}


def _md_escape(v: Any) -> str:
    s = "" if v is None else str(v)
    return s.replace("|", "\\|").replace("\n", " ").strip()


def _ratio(v: Any) -> str:
    if v is None:
        return "-"
    try:
        return f"{float(v):.6g}"
    except (TypeError, ValueError):
        return _md_escape(v)


def render_changes_table(outcome: SyncOutcome, key: str) -> str:
    changes = outcome.changes.get(key) or {}
    if not changes:
        return "_no changes_"
    rows = ["| Model | Old | New |", "|---|---|---|"]
    for model, (old, new) in changes.items():
        rows.append(f"| {_md_escape(model)} | {_ratio(old)} | {_ratio(new)} |")
    return "\n".join(rows)


def render_publish_table(outcome: SyncOutcome) -> str:
    rows = ["| Option | Status | Detail |", "|---|---|---|"]
    for result in outcome.publishes:
        icon = _STATUS_ICONS.get(result.status, "")
        detail = result.error or ""
        if result.status == "skipped":
            issue = next((i for i in outcome.issues if i.key == result.key), None)
            detail = issue.message if issue else "table not available"
        rows.append(
            f"| {result.key} | {icon} {result.status} | {_md_escape(detail) or '-'} |"
        )
    return "\n".join(rows)


def render_sync_report(outcome: SyncOutcome) -> str:
    lines: List[str] = [
        f"# Channel `{outcome.channel_name}`",
        "",
        f"- Completion ratio: {_ratio(outcome.ratios.completion_ratio)}",
        f"- Model ratio: {_ratio(outcome.ratios.model_ratio)}",
        "",
    ]
    for key in PUBLISH_ORDER:
        lines += [f"## {key}", "", render_changes_table(outcome, key), ""]
    lines += ["## Publish", "", render_publish_table(outcome)]
    return "\n".join(lines)
