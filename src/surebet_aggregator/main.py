# -*- coding: utf-8 -*-
"""
Entry point for the surebet aggregator.

Orchestrates: logging, settings, container, one aggregation run, HTTP client shutdown.
Flow: scraper task (or file) -> parse -> combinations -> dedup ledger -> frequency table
-> results sink, then persist ledger and counts.

Run with: python -m surebet_aggregator.main   (or the `surebet-aggregator` script)

Notebook usage:
    from surebet_aggregator.main import run
    summary = await run()
"""
from __future__ import annotations

import asyncio
import sys
import structlog

from surebet_aggregator.DI import Container
from surebet_aggregator.exceptions import StateError, SurebetAggregatorError
from surebet_aggregator.logging.config import configure_logging
from surebet_aggregator.services.aggregation import RunSummary
from surebet_aggregator.utils import mask_token


async def run(container: Container | None = None) -> RunSummary:
    """Configure logging, wire the container and execute a single run."""
    container = container or Container()
    settings = container.config()
    configure_logging(settings)
    logger = structlog.get_logger("main")

    logger.info(
        "main_run_starting",
        source_backend=settings.source.backend,
        storage_backend=settings.storage.backend,
        scraper_task_id=settings.effective_task_id,
        apify_token=mask_token(settings.effective_token),
        max_brokers=settings.engine.max_brokers,
    )
    http_client = container.http_client()
    try:
        runner = container.aggregation_runner()
        summary = await runner.run()
    finally:
        await http_client.aclose()

    logger.info(
        "main_run_complete",
        run_id=summary.run_id,
        items_fetched=summary.items_fetched,
        new_records=summary.new_records,
        seen_hashes_added=summary.seen_hashes_added,
        seen_hashes_total=summary.seen_hashes_total,
        combos_incremented=summary.combos_incremented,
        combos_tracked=summary.combos_tracked,
    )
    return summary


def main() -> None:
    try:
        asyncio.run(run())
    except (SurebetAggregatorError, StateError) as e:
        structlog.get_logger("main").error(
            "main_run_aborted",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        sys.exit(1)


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
