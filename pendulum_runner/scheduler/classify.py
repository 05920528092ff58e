"""Classify a schedule as inactive, expired or valid before any I/O happens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from pendulum_runner.scheduler.models import Schedule


@dataclass(frozen=True)
class Inactive:
    """Deactivated schedule. Nothing to do."""

    schedule: Schedule


@dataclass(frozen=True)
class Expired:
    """Active schedule past its expiration date. Needs deactivating."""

    schedule: Schedule


@dataclass(frozen=True)
class Valid:
    """Active schedule inside its window. Should fire."""

    schedule: Schedule


ScheduleState = Inactive | Expired | Valid


def classify(schedule: Schedule, today: date) -> ScheduleState:
    """Return the single state *schedule* is in on *today*.

    Checked in order: inactive, then expired, then valid.
    """
    if not schedule.status:
        return Inactive(schedule)
    if schedule.is_expired_on(today):
        return Expired(schedule)
    return Valid(schedule)
