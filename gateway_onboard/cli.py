#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
gateway-onboard – CLI

Flow:
- Reads the upstream source (base URL, token, model name) and its raw
  USD prices per 1M input/output tokens.
- Creates a channel on the gateway routing the gateway model name to the
  upstream model.
- Fetches the gateway's CompletionRatio / ModelRatio tables, merges the
  new model's ratios, and writes each table back.
- Prints a Markdown summary (or the outcome as JSON with --json).

Exit codes: 0 ok, 1 aborted (bad input or gateway error), 2 channel
created but at least one ratio table failed to publish.
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console

from .config import (
    DEFAULT_LOG_LEVEL,
    GATEWAY_BASE_URL,
    MODEL_RATIO_BASELINE,
    mask_secret,
    resolve_system_token,
)
from .errors import DomainError, GatewayError, OnboardError
from .orchestrator import run_onboarding
from .reporting import render_sync_report
from .utils.trace import RunTrace

console = Console()


# --------------------------------------------------------------------
# Argument parsing
# --------------------------------------------------------------------
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gateway-onboard",
        description=(
            "Onboard an upstream model on the LLM gateway\n\n"
            "- Creates a channel '<host> <source-model> -> <gateway-model>'\n"
            "- Adds the model to the gateway's CompletionRatio and ModelRatio tables\n"
            "The gateway admin token is read from $SYSTEM_TOKEN."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--base-url", required=True, help="Upstream base URL, e.g. https://api.example.com/v1")
    parser.add_argument(
        "--source-token",
        default=os.getenv("SOURCE_TOKEN", ""),
        help="Upstream API key (default: $SOURCE_TOKEN).",
    )
    parser.add_argument("--source-model", required=True, help="Model name used by the upstream provider.")
    parser.add_argument("--gateway-model", required=True, help="Model name exposed by the gateway.")
    parser.add_argument("--input-price", type=float, required=True, help="USD per 1M input tokens.")
    parser.add_argument("--output-price", type=float, required=True, help="USD per 1M output tokens.")

    parser.add_argument(
        "--gateway-url",
        default=GATEWAY_BASE_URL,
        help=f"Gateway admin API root (default: {GATEWAY_BASE_URL}).",
    )
    parser.add_argument(
        "--model-ratio-baseline",
        type=float,
        default=MODEL_RATIO_BASELINE,
        help="USD per 1M input tokens that corresponds to ModelRatio 1.",
    )
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default=DEFAULT_LOG_LEVEL.upper(),
        help="Logging level for internal messages.",
    )
    parser.add_argument(
        "--trace-path",
        default=None,
        help="If set, append a JSONL trace of the run phases to this file.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON instead of the Markdown summary.",
    )

    return parser.parse_args(argv)


# --------------------------------------------------------------------
# Main
# --------------------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    logger = logging.getLogger("gateway_onboard")

    system_token = resolve_system_token()
    logger.info("System token: %s", mask_secret(system_token))
    logger.info("Source token: %s", mask_secret(args.source_token))
    logger.debug("CLI arguments: %s", {**vars(args), "source_token": "***"})

    trace = None
    if args.trace_path:
        trace = RunTrace(args.trace_path, secrets=(system_token, args.source_token))
        trace.setup(**vars(args))

    console.print("[bold]Gateway onboarding[/bold]\n")
    console.print(f"[cyan]{args.source_model} -> {args.gateway_model} via {args.gateway_url}[/cyan]")

    try:
        outcome = run_onboarding(
            args.base_url,
            args.source_token,
            args.source_model,
            args.gateway_model,
            args.input_price,
            args.output_price,
            system_token=system_token,
            gateway_url=args.gateway_url,
            model_ratio_baseline=args.model_ratio_baseline,
            trace=trace,
        )
    except DomainError as ex:
        console.print(f"[red]Invalid input: {ex}[/red]")
        return 1
    except GatewayError as ex:
        logger.error("Gateway call failed: %s", ex)
        console.print(f"[red]Gateway call failed: {ex}[/red]")
        return 1
    except OnboardError as ex:
        console.print(f"[red]Onboarding failed: {ex}[/red]")
        return 1

    if args.json:
        console.print_json(json.dumps(outcome.to_dict(), ensure_ascii=False))
    else:
        console.rule("[bold green]Onboarding summary[/bold green]")
        console.print(render_sync_report(outcome), markup=False)

    if not outcome.ok:
        console.print("[yellow]Channel created, but some ratio tables were not published.[/yellow]")
        return 2
    console.print("[green]Done.[/green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
