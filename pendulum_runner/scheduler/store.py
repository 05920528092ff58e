"""libsql-backed ScheduleStore and ScheduleHistoryStore."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from pendulum_runner.db import connection
from pendulum_runner.errors import ScheduleNotFoundError
from pendulum_runner.scheduler.models import Schedule, ScheduleHistory

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from pendulum_runner.db import AsyncConnection

logger = logging.getLogger(__name__)

_CREATE_SCHEDULES = """
CREATE TABLE IF NOT EXISTS schedules (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    target_url TEXT NOT NULL,
    http_method TEXT NOT NULL DEFAULT 'GET',
    status INTEGER NOT NULL DEFAULT 1,
    expiration_date TEXT NOT NULL,
    last_ran_date TEXT,
    created_at TEXT NOT NULL
)
"""

_CREATE_HISTORY = """
CREATE TABLE IF NOT EXISTS schedule_history (
    id TEXT PRIMARY KEY,
    schedule_id TEXT NOT NULL,
    response_status INTEGER NOT NULL,
    ran_at TEXT NOT NULL
)
"""

_CREATE_HISTORY_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_schedule_history_schedule_id "
    "ON schedule_history (schedule_id, ran_at)"
)


class _LibsqlStore:
    """Shared connection handling. Subclasses list their DDL in ``_schema``."""

    _schema: tuple[str, ...] = ()

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path
        self._initialised = False

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[AsyncConnection]:
        async with connection(self._db_path) as db:
            if not self._initialised:
                await db.write_many([(statement, ()) for statement in self._schema])
                self._initialised = True
            yield db


class LibsqlScheduleStore(_LibsqlStore):
    """Persists schedules in the ``schedules`` table.

    Pass an explicit *db_path* for test isolation (e.g. ``tmp_path / "test.db"``).
    """

    _schema = (_CREATE_SCHEDULES,)

    async def add(self, schedule: Schedule) -> Schedule:
        """Insert a new schedule. Returns the same object."""
        async with self._connect() as db:
            await db.write(
                """
                INSERT INTO schedules
                    (id, name, target_url, http_method, status,
                     expiration_date, last_ran_date, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                schedule.to_row(),
            )
        logger.info("Added schedule: %s (%s)", schedule.name, schedule.id)
        return schedule

    async def get(self, schedule_id: str) -> Schedule | None:
        """Fetch a schedule by ID, or None if not found."""
        async with self._connect() as db:
            row = await db.fetchone("SELECT * FROM schedules WHERE id = ?", (schedule_id,))
        return Schedule.from_row(row) if row else None

    async def list_active(self) -> list[Schedule]:
        """Return every schedule whose status is active."""
        async with self._connect() as db:
            rows = await db.fetchall(
                "SELECT * FROM schedules WHERE status = 1 ORDER BY created_at"
            )
        return [Schedule.from_row(row) for row in rows]

    async def update(self, schedule: Schedule) -> None:
        """Overwrite the stored row with the full *schedule* snapshot.

        Raises ``ScheduleNotFoundError`` if no row has the schedule's ID.
        """
        row = schedule.to_row()
        async with self._connect() as db:
            updated = await db.write(
                """
                UPDATE schedules
                SET name = ?, target_url = ?, http_method = ?, status = ?,
                    expiration_date = ?, last_ran_date = ?
                WHERE id = ?
                """,
                (*row[1:7], schedule.id),
            )
        if updated == 0:
            raise ScheduleNotFoundError(schedule.id)
        logger.debug("Updated schedule: %s (%s)", schedule.name, schedule.id)


class LibsqlScheduleHistoryStore(_LibsqlStore):
    """Append-only execution log in the ``schedule_history`` table."""

    _schema = (_CREATE_HISTORY, _CREATE_HISTORY_INDEX)

    async def create(self, history: ScheduleHistory) -> None:
        async with self._connect() as db:
            await db.write(
                """
                INSERT INTO schedule_history (id, schedule_id, response_status, ran_at)
                VALUES (?, ?, ?, ?)
                """,
                history.to_row(),
            )

    async def list_for_schedule(self, schedule_id: str) -> list[ScheduleHistory]:
        """Return the schedule's history, newest first."""
        async with self._connect() as db:
            rows = await db.fetchall(
                "SELECT * FROM schedule_history WHERE schedule_id = ? ORDER BY ran_at DESC",
                (schedule_id,),
            )
        return [ScheduleHistory.from_row(row) for row in rows]
