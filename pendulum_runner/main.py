"""Pendulum entry point.

Usage:
    # Run the sweep every SWEEP_INTERVAL_SECONDS until interrupted
    python -m pendulum_runner.main

    # Run a single sweep and exit
    python -m pendulum_runner.main --once
"""

import argparse
import asyncio
import logging

from pendulum_runner.config import settings
from pendulum_runner.scheduler.engine import SchedulerEngine
from pendulum_runner.scheduler.runner import ScheduleRunner
from pendulum_runner.scheduler.store import LibsqlScheduleHistoryStore, LibsqlScheduleStore
from pendulum_runner.scheduler.transport import HttpxTransport

logger = logging.getLogger(__name__)


def build_engine() -> SchedulerEngine:
    """Wire the stores, transport and runner into a SchedulerEngine."""
    store = LibsqlScheduleStore()
    runner = ScheduleRunner(
        schedule_store=store,
        history_store=LibsqlScheduleHistoryStore(),
        transport=HttpxTransport(),
    )
    return SchedulerEngine(store=store, runner=runner)


async def run(once: bool = False) -> None:
    engine = build_engine()
    if once:
        await engine.sweep()
        return

    await engine.start()
    try:
        await asyncio.Event().wait()
    finally:
        await engine.stop()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run Pendulum schedules")
    parser.add_argument("--once", action="store_true", help="Run one sweep and exit")
    args = parser.parse_args()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )
    logger.info("Starting Pendulum (db=%s)", settings.turso_database_url or settings.database_path)
    try:
        asyncio.run(run(once=args.once))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
