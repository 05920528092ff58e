"""SchedulerEngine — APScheduler interval sweep over active schedules."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from pendulum_runner.config import settings

if TYPE_CHECKING:
    from pendulum_runner.scheduler.runner import ScheduleRunner
    from pendulum_runner.scheduler.store import LibsqlScheduleStore

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "pendulum-sweep"


class SchedulerEngine:
    """Periodically hands every active schedule to the ScheduleRunner.

    Args:
        store: Source of active schedules.
        runner: ScheduleRunner that decides and executes each schedule.
        interval_seconds: Seconds between sweeps (default from settings).
        timezone: IANA timezone string (default from settings).
    """

    def __init__(
        self,
        store: LibsqlScheduleStore,
        runner: ScheduleRunner,
        interval_seconds: int | None = None,
        timezone: str | None = None,
    ) -> None:
        self._store = store
        self._runner = runner
        if interval_seconds is None:
            interval_seconds = settings.sweep_interval_seconds
        if interval_seconds <= 0:
            msg = f"interval_seconds must be positive, got {interval_seconds}"
            raise ValueError(msg)
        self._interval = interval_seconds
        self._timezone = timezone or settings.scheduler_timezone
        self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    # -- Lifecycle -------------------------------------------------------------

    async def start(self) -> None:
        """Register the sweep job and start the scheduler."""
        self._scheduler.add_job(
            self.sweep,
            trigger=IntervalTrigger(seconds=self._interval, timezone=self._timezone),
            id=SWEEP_JOB_ID,
            name="Run active schedules",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        self._running = True
        logger.info(
            "Scheduler started (every %ds, tz=%s)", self._interval, self._timezone
        )

    async def stop(self) -> None:
        """Shut down the scheduler."""
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    # -- Sweep -----------------------------------------------------------------

    async def sweep(self) -> int:
        """Run every active schedule concurrently.

        A failure in one schedule is logged and does not affect the others.
        Returns the number of schedules that completed without error.
        """
        schedules = await self._store.list_active()
        if not schedules:
            logger.debug("Sweep found no active schedules")
            return 0

        results = await asyncio.gather(
            *(self._runner.run_active_schedule(s) for s in schedules),
            return_exceptions=True,
        )

        succeeded = 0
        for schedule, result in zip(schedules, results, strict=True):
            if isinstance(result, BaseException):
                logger.error(
                    "Schedule run failed: '%s' (%s)",
                    schedule.name,
                    schedule.id,
                    exc_info=result,
                )
            else:
                succeeded += 1
        logger.info("Sweep finished: %d/%d schedule(s) ok", succeeded, len(schedules))
        return succeeded
