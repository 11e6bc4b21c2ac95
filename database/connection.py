"""SQLite connection pool for the local club database."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from core.constants import DatabaseDefaults
from core.exceptions import ConnectionPoolError
from core.logger import get_logger

logger = get_logger(__name__)


class SQLitePool:
    """Fixed-size pool of aiosqlite connections.

    Connections are handed out through a queue; callers wait until one is
    returned rather than failing when the pool is busy.
    """

    def __init__(
        self,
        database_path: str,
        pool_size: int = DatabaseDefaults.POOL_SIZE,
        busy_timeout_ms: int = DatabaseDefaults.BUSY_TIMEOUT,
    ) -> None:
        self.database_path = Path(database_path)
        self.pool_size = pool_size
        self.busy_timeout_ms = busy_timeout_ms
        self._connections: list[aiosqlite.Connection] = []
        self._idle: Optional[asyncio.Queue[aiosqlite.Connection]] = None
        self._initialized = False

    async def init_pool(self) -> None:
        if self._initialized:
            return

        if not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)

        self._idle = asyncio.Queue()
        try:
            for _ in range(self.pool_size):
                conn = await aiosqlite.connect(self.database_path.as_posix())
                conn.row_factory = aiosqlite.Row
                await self._apply_pragma(conn)
                self._connections.append(conn)
                self._idle.put_nowait(conn)
        except aiosqlite.Error as exc:
            await self.close()
            raise ConnectionPoolError(f"Cannot open {self.database_path}: {exc}") from exc

        self._initialized = True
        logger.debug(f"Opened {self.pool_size} connections to {self.database_path}")

    async def close(self) -> None:
        while self._connections:
            conn = self._connections.pop()
            await conn.close()
        self._idle = None
        self._initialized = False

    async def _apply_pragma(self, conn: aiosqlite.Connection) -> None:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute("PRAGMA temp_store=MEMORY")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout_ms}")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if not self._initialized:
            await self.init_pool()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            try:
                if conn.in_transaction:
                    # A failed statement left an implicit transaction open
                    await conn.rollback()
            finally:
                self._idle.put_nowait(conn)


_db_pool: Optional[SQLitePool] = None


def get_db_pool() -> SQLitePool:
    if _db_pool is None:
        raise ConnectionPoolError("Database pool not initialized")
    return _db_pool


async def init_db_pool(database_path: str, pool_size: int, busy_timeout_ms: int) -> SQLitePool:
    global _db_pool
    pool = SQLitePool(database_path=database_path, pool_size=pool_size, busy_timeout_ms=busy_timeout_ms)
    await pool.init_pool()
    _db_pool = pool
    return pool


async def close_db_pool() -> None:
    global _db_pool
    if _db_pool is not None:
        await _db_pool.close()
        _db_pool = None
