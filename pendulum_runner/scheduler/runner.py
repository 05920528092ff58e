"""ScheduleRunner — decides whether a schedule fires, fires it, records the result."""

from __future__ import annotations

import logging
import zoneinfo
from datetime import datetime
from typing import TYPE_CHECKING

from pendulum_runner.config import settings
from pendulum_runner.scheduler.classify import Expired, Inactive, Valid, classify
from pendulum_runner.scheduler.models import ScheduleHistory, make_id

if TYPE_CHECKING:
    from collections.abc import Callable

    from pendulum_runner.scheduler.interfaces import HttpTransport, ScheduleHistoryStore, ScheduleStore
    from pendulum_runner.scheduler.models import Schedule

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now(zoneinfo.ZoneInfo(settings.scheduler_timezone))


class ScheduleRunner:
    """Runs one schedule per call to :meth:`run_active_schedule`.

    Args:
        schedule_store: Receives the updated schedule snapshot.
        history_store: Receives one ScheduleHistory per fired schedule.
        transport: Performs the schedule's HTTP request.
        clock: Returns the current time. Defaults to now in
            ``settings.scheduler_timezone``.
    """

    def __init__(
        self,
        schedule_store: ScheduleStore,
        history_store: ScheduleHistoryStore,
        transport: HttpTransport,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._schedule_store = schedule_store
        self._history_store = history_store
        self._transport = transport
        self._clock = clock or _local_now

    async def run_active_schedule(self, schedule: Schedule) -> None:
        """Classify *schedule* and apply the matching action.

        - inactive: nothing
        - expired: set ``status = False`` and update the store
        - valid: call the target, set ``last_ran_date``, update the store,
          then append a history record

        Store errors propagate. A failed HTTP call does not raise; its status
        is recorded like any other.
        """
        now = self._clock()
        match classify(schedule, now.date()):
            case Inactive():
                logger.debug("Skipping inactive schedule: '%s' (%s)", schedule.name, schedule.id)
            case Expired(schedule=expired):
                await self._deactivate(expired)
            case Valid(schedule=due):
                await self._fire(due)

    async def _deactivate(self, schedule: Schedule) -> None:
        schedule.status = False
        await self._schedule_store.update(schedule)
        logger.info(
            "Deactivated expired schedule: '%s' (%s) expired %s",
            schedule.name,
            schedule.id,
            schedule.expiration_date.isoformat(),
        )

    async def _fire(self, schedule: Schedule) -> None:
        logger.info(
            "Running schedule: '%s' (%s) %s %s",
            schedule.name,
            schedule.id,
            schedule.http_method,
            schedule.target_url,
        )
        status = await self._transport.send(schedule)

        ran_at = self._clock()
        schedule.last_ran_date = ran_at
        await self._schedule_store.update(schedule)

        history = ScheduleHistory(
            id=make_id(),
            schedule_id=schedule.id,
            response_status=status,
            ran_at=ran_at,
        )
        await self._history_store.create(history)
        logger.info(
            "Recorded run of '%s' (%s) with status %d", schedule.name, schedule.id, status
        )
