"""libsql access for the schedule stores.

``libsql`` only ships a blocking driver; ``AsyncConnection`` moves each call
onto a worker thread.  ``connection()`` picks the target from settings:

- ``TURSO_DATABASE_URL`` set → hosted Turso database
- otherwise → local SQLite file at ``database_path``
"""

from __future__ import annotations

import asyncio
import logging
import threading
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import libsql

from pendulum_runner.config import settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

_BUSY_TIMEOUT_MS = 5000

# Held from the first write statement until commit, across every connection
# in the process, so only one write transaction is ever open at a time.
_write_lock = threading.Lock()


def _write_all(conn: Any, statements: Sequence[tuple[str, tuple]]) -> int:
    with _write_lock:
        rowcount = 0
        for sql, params in statements:
            rowcount = conn.execute(sql, params).rowcount
        conn.commit()
    return rowcount


class AsyncConnection:
    """A blocking libsql connection driven from the event loop."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: tuple = ()) -> Any:
        """Run one statement and return the driver cursor."""
        return await asyncio.to_thread(self._conn.execute, sql, params)

    async def write(self, sql: str, params: tuple = ()) -> int:
        """Execute and commit one statement in a single worker hop.

        Returns the number of rows the statement changed.
        """
        return await asyncio.to_thread(_write_all, self._conn, [(sql, params)])

    async def write_many(self, statements: Sequence[tuple[str, tuple]]) -> int:
        """Execute *statements* and commit them together."""
        return await asyncio.to_thread(_write_all, self._conn, statements)

    async def fetchone(self, sql: str, params: tuple = ()) -> tuple | None:
        cursor = await self.execute(sql, params)
        return await asyncio.to_thread(cursor.fetchone)

    async def fetchall(self, sql: str, params: tuple = ()) -> list[tuple]:
        cursor = await self.execute(sql, params)
        return await asyncio.to_thread(cursor.fetchall)

    async def commit(self) -> None:
        await asyncio.to_thread(self._conn.commit)

    async def close(self) -> None:
        await asyncio.to_thread(self._conn.close)


def _open_file(path: Path) -> Any:
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = libsql.connect(str(path))
    conn.execute(f"PRAGMA busy_timeout={_BUSY_TIMEOUT_MS}")
    with _write_lock:
        conn.execute("PRAGMA journal_mode=WAL")
    return conn


def _open_remote() -> Any:
    return libsql.connect(
        database=settings.turso_database_url,
        auth_token=settings.turso_auth_token,
    )


async def open_connection(db_path: Path | None = None) -> AsyncConnection:
    """Open a connection; an explicit *db_path* always wins (test isolation)."""
    if db_path is not None:
        raw = await asyncio.to_thread(_open_file, db_path)
    elif settings.turso_database_url:
        logger.debug("Connecting to Turso at %s", settings.turso_database_url)
        raw = await asyncio.to_thread(_open_remote)
    else:
        raw = await asyncio.to_thread(_open_file, settings.database_path)
    return AsyncConnection(raw)


@asynccontextmanager
async def connection(db_path: Path | None = None) -> AsyncIterator[AsyncConnection]:
    """Yield an open connection and always close it afterwards."""
    db = await open_connection(db_path)
    try:
        yield db
    finally:
        await db.close()
