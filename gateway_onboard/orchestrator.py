"""
Onboarding flow: provision a channel, then sync CompletionRatio / ModelRatio.

Phases, strictly in order and never repeated:

    validate -> provision channel -> fetch + merge -> publish -> done

- validate: inputs are checked and ratios derived before any remote call,
  so a bad price (e.g. zero input price) has no side effects at all.
- provision / fetch: any GatewayError aborts the run. A channel created
  before a later failure is NOT rolled back.
- publish: each table is written independently; failures are reported in
  SyncOutcome.publishes instead of being raised.

Concurrency: each run owns its copies of the two tables. Two runs against
the same gateway race on the same option keys and the last write wins.
Do not onboard several models against one gateway in parallel.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from .channel import build_channel_descriptor, build_channel_payload
from .config import GATEWAY_BASE_URL, mask_secret, resolve_system_token
from .gateway import GatewayClient, OptionGateway
from .pricing import derive_ratios, extract_ratio_tables, merge_fetched, publish_tables, ratio_changes
from .types import SyncOutcome
from .utils.trace import RunTrace
from .validation import validate_inputs

_LOGGER = logging.getLogger(__name__)


async def onboard_model(
    gateway: OptionGateway,
    source_base_url: str,
    source_token: str,
    source_model_name: str,
    gateway_model_name: str,
    input_price_per_million: Any,
    output_price_per_million: Any,
    *,
    model_ratio_baseline: Optional[float] = None,
    trace: Optional[RunTrace] = None,
) -> SyncOutcome:
    identity, quote = validate_inputs(
        source_base_url,
        source_token,
        source_model_name,
        gateway_model_name,
        input_price_per_million,
        output_price_per_million,
    )
    ratios = derive_ratios(quote, model_ratio_baseline)
    _LOGGER.info(
        "Onboarding %s -> %s (input $%s / output $%s per 1M tokens)",
        identity.source_name,
        identity.gateway_name,
        quote.input_price_per_million,
        quote.output_price_per_million,
    )

    # 1) provision channel
    descriptor = build_channel_descriptor(identity)
    payload = build_channel_payload(descriptor, identity, source_token)
    if trace:
        trace.add_secret(source_token)
    _LOGGER.info("Creating channel %r", descriptor.display_name)
    _LOGGER.debug("Channel payload (key %s): %s", mask_secret(source_token), {**payload, "key": "***"})
    await gateway.create_channel(payload)
    if trace:
        trace.channel_created(descriptor)

    # 2) fetch + merge
    entries = await gateway.fetch_options()
    completion, model = extract_ratio_tables(entries)
    if trace:
        trace.options_fetched(len(entries), (completion, model))

    changes = {}
    for fetch, value in ((completion, ratios.completion_ratio), (model, ratios.model_ratio)):
        if fetch.table is None:
            continue
        before = dict(fetch.table)
        merge_fetched(fetch, identity, value)
        changes[fetch.key] = ratio_changes(before, fetch.table)
        if trace:
            trace.table_merged(fetch.key, changes[fetch.key])

    # 3) publish
    publishes = await publish_tables(gateway, (completion, model))
    if trace:
        trace.tables_published(publishes)

    outcome = SyncOutcome(
        channel_name=descriptor.display_name,
        ratios=ratios,
        completion=completion,
        model=model,
        publishes=publishes,
        changes=changes,
    )
    if trace:
        trace.finished(outcome)
    if outcome.ok:
        _LOGGER.info("Model price rate update completed")
    else:
        _LOGGER.error(
            "Model price rate update finished with failures: %s",
            ", ".join(p.key for p in outcome.failed_publishes),
        )
    return outcome


def run_onboarding(
    source_base_url: str,
    source_token: str,
    source_model_name: str,
    gateway_model_name: str,
    input_price_per_million: Any,
    output_price_per_million: Any,
    *,
    system_token: Optional[str] = None,
    gateway_url: str = GATEWAY_BASE_URL,
    model_ratio_baseline: Optional[float] = None,
    trace: Optional[RunTrace] = None,
) -> SyncOutcome:
    """
    Synchronous entry point: open a GatewayClient and run one onboarding.

    `system_token` defaults to $SYSTEM_TOKEN (with a placeholder fallback
    that logs a warning; pass it explicitly when embedding this function).
    """
    token = system_token or resolve_system_token()
    if trace:
        trace.add_secret(token)

    async def _run() -> SyncOutcome:
        async with GatewayClient(token, gateway_url) as client:
            return await onboard_model(
                client,
                source_base_url,
                source_token,
                source_model_name,
                gateway_model_name,
                input_price_per_million,
                output_price_per_million,
                model_ratio_baseline=model_ratio_baseline,
                trace=trace,
            )

    return asyncio.run(_run())
