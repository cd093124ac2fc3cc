# gateway_onboard/pricing/publish.py
from __future__ import annotations

import json
import logging
from typing import Dict, Iterable, List

from ..config import PUBLISH_ORDER
from ..errors import GatewayError
from ..gateway.client import OptionGateway
from ..types import PublishResult, RatioTable, TableFetch

_LOGGER = logging.getLogger(__name__)


def serialize_table(table: RatioTable) -> str:
    """Compact JSON, key order as fetched."""
    return json.dumps(table, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


async def publish_tables(
    gateway: OptionGateway,
    fetches: Iterable[TableFetch],
    order: Iterable[str] = PUBLISH_ORDER,
) -> List[PublishResult]:
    """
    Write every present table back to the gateway, one PUT per table.

    Tables are published sequentially in `order`. A failure on one table
    is recorded and the next table is still attempted. Absent tables are
    reported as "skipped" and never written.
    """
    by_key: Dict[str, TableFetch] = {f.key: f for f in fetches}
    results: List[PublishResult] = []

    for key in order:
        fetch = by_key.get(key)
        if fetch is None or fetch.table is None:
            _LOGGER.warning("%s not available, skipping update", key)
            results.append(PublishResult(key=key, status="skipped"))
            continue

        _LOGGER.info("Updating %s on gateway...", key)
        try:
            await gateway.update_option(key, serialize_table(fetch.table))
        except GatewayError as ex:
            _LOGGER.error("%s update failed: %s", key, ex)
            results.append(PublishResult(key=key, status="failed", error=str(ex)))
            continue
        results.append(PublishResult(key=key, status="updated"))

    return results
