"""Capability protocols the ScheduleRunner depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pendulum_runner.scheduler.models import Schedule, ScheduleHistory


@runtime_checkable
class ScheduleStore(Protocol):
    """Persists full schedule snapshots."""

    async def update(self, schedule: Schedule) -> None:
        """Overwrite the stored schedule with *schedule*. Must be idempotent."""
        ...


@runtime_checkable
class ScheduleHistoryStore(Protocol):
    """Append-only log of schedule executions."""

    async def create(self, history: ScheduleHistory) -> None:
        """Append one history record."""
        ...


@runtime_checkable
class HttpTransport(Protocol):
    """Sends a schedule's request and reports the status code."""

    async def send(self, schedule: Schedule) -> int:
        """Return the HTTP status, or ``TRANSPORT_FAILURE_STATUS`` if none was received."""
        ...
