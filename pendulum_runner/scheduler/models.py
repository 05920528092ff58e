"""Schedule and ScheduleHistory data models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime


@dataclass
class Schedule:
    """A recurring HTTP call with an activation window.

    Attributes:
        id: Unique identifier (UUID hex).
        name: Human-readable name.
        target_url: Endpoint the schedule calls when it fires.
        expiration_date: Last calendar date on which the schedule may fire.
        http_method: Verb used for the call.
        status: ``True`` while active. The runner flips it to ``False`` once
            the schedule has expired; nothing in this package turns it back on.
        last_ran_date: When the runner last fired the schedule.
        created_at: ISO 8601 timestamp.
    """

    id: str
    name: str
    target_url: str
    expiration_date: date
    http_method: str = "GET"
    status: bool = True
    last_ran_date: datetime | None = None
    created_at: str = ""

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.now(UTC).isoformat()
        self.http_method = self.http_method.upper()

    def is_expired_on(self, today: date) -> bool:
        return today > self.expiration_date

    # -- Serialization ---------------------------------------------------------

    def to_row(self) -> tuple:
        """Serialize to a tuple matching the ``schedules`` column order."""
        return (
            self.id,
            self.name,
            self.target_url,
            self.http_method,
            int(self.status),
            self.expiration_date.isoformat(),
            self.last_ran_date.isoformat() if self.last_ran_date else None,
            self.created_at,
        )

    @classmethod
    def from_row(cls, row: tuple) -> Schedule:
        """Deserialize from a ``schedules`` row tuple."""
        return cls(
            id=row[0],
            name=row[1],
            target_url=row[2],
            http_method=row[3],
            status=bool(row[4]),
            expiration_date=date.fromisoformat(row[5]),
            last_ran_date=datetime.fromisoformat(row[6]) if row[6] else None,
            created_at=row[7],
        )


@dataclass(frozen=True)
class ScheduleHistory:
    """One recorded execution of a schedule.

    ``response_status`` is the HTTP status of the call, or
    ``TRANSPORT_FAILURE_STATUS`` when no response was received.
    """

    id: str
    schedule_id: str
    response_status: int
    ran_at: datetime

    def to_row(self) -> tuple:
        return (self.id, self.schedule_id, self.response_status, self.ran_at.isoformat())

    @classmethod
    def from_row(cls, row: tuple) -> ScheduleHistory:
        return cls(
            id=row[0],
            schedule_id=row[1],
            response_status=int(row[2]),
            ran_at=datetime.fromisoformat(row[3]),
        )


def make_id() -> str:
    """Generate a new record ID."""
    return uuid.uuid4().hex
