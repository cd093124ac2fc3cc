"""
JSONL run trace for onboarding.

One line per phase event:

    phase0_setup      run settings (prices, model names, gateway URL)
    phase1_channel    channel name and model list
    phase2_fetch      option count and per-table fetch status
    phase3_merge      per-table ratio changes
    phase4_publish    per-table publish status
    phase5_done       overall result

Secrets never reach the file: fields named like credentials are replaced
with "***", and any registered secret value is masked wherever it appears.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Set, Tuple, Union

from ..config import mask_secret
from ..types import ChannelDescriptor, PublishResult, SyncOutcome, TableFetch

_CREDENTIAL_FIELDS = {"key", "token", "source_token", "system_token", "authorization", "api_key"}


class RunTrace:
    def __init__(
        self,
        path: Union[Path, str],
        run_id: Optional[str] = None,
        secrets: Iterable[str] = (),
    ) -> None:
        self.path = Path(path)
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self._secrets: Set[str] = set()
        for secret in secrets:
            self.add_secret(secret)

    def add_secret(self, value: Optional[str]) -> None:
        if value and value.strip():
            self._secrets.add(value)

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: "***" if str(k).lower() in _CREDENTIAL_FIELDS else self._scrub(v)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._scrub(v) for v in value]
        if isinstance(value, str):
            for secret in self._secrets:
                if secret in value:
                    value = value.replace(secret, mask_secret(secret))
        return value

    def _write(self, phase: str, **fields: Any) -> None:
        event: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run_id": self.run_id,
            "phase": phase,
        }
        event.update(self._scrub(fields))
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(event, ensure_ascii=False) + "\n")

    def setup(self, **settings: Any) -> None:
        self._write("phase0_setup", settings=settings)

    def channel_created(self, descriptor: ChannelDescriptor) -> None:
        self._write(
            "phase1_channel",
            name=descriptor.display_name,
            models=list(descriptor.model_list),
        )

    def options_fetched(self, option_count: int, fetches: Sequence[TableFetch]) -> None:
        tables = []
        for fetch in fetches:
            entry: Dict[str, Any] = {"table": fetch.key, "present": fetch.present}
            if fetch.issue is not None:
                entry["issue"] = fetch.issue.issue
                entry["message"] = fetch.issue.message
            else:
                entry["entries"] = len(fetch.table)
            tables.append(entry)
        self._write("phase2_fetch", option_count=option_count, tables=tables)

    def table_merged(self, table: str, changes: Dict[str, Tuple[Any, Any]]) -> None:
        self._write(
            "phase3_merge",
            table=table,
            changes=[{"model": m, "old": old, "new": new} for m, (old, new) in changes.items()],
        )

    def tables_published(self, results: Sequence[PublishResult]) -> None:
        self._write(
            "phase4_publish",
            results=[{"table": r.key, "status": r.status, "error": r.error} for r in results],
        )

    def finished(self, outcome: SyncOutcome) -> None:
        self._write(
            "phase5_done",
            ok=outcome.ok,
            channel=outcome.channel_name,
            failed=[r.key for r in outcome.failed_publishes],
        )


__all__ = ["RunTrace"]
