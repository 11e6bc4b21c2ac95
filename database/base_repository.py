"""Base repository pattern for database operations."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Sequence

import aiosqlite

from core.exceptions import StorageError
from database.connection import SQLitePool, get_db_pool


class BaseRepository:
    """Base repository with common database operations.

    A repository either borrows a pooled connection per call and commits it,
    or, when constructed with ``conn``, runs every statement on that
    connection and leaves commit/rollback to whoever owns the transaction.
    """

    def __init__(
        self,
        pool: Optional[SQLitePool] = None,
        conn: Optional[aiosqlite.Connection] = None,
    ) -> None:
        self.pool = pool or get_db_pool()
        self.conn = conn

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        try:
            if self.conn is not None:
                yield self.conn
            else:
                async with self.pool.connection() as conn:
                    yield conn
        except (aiosqlite.Error, ValueError) as exc:
            # aiosqlite raises ValueError once its connection is closed
            raise StorageError(str(exc)) from exc

    async def _commit(self, conn: aiosqlite.Connection) -> None:
        if self.conn is None:
            await conn.commit()

    async def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Execute a write and return the affected row count."""
        async with self._connect() as conn:
            cursor = await conn.execute(query, params)
            await self._commit(conn)
            return cursor.rowcount

    async def insert(self, query: str, params: Sequence[Any] = ()) -> int:
        """Execute an INSERT and return the new row id."""
        async with self._connect() as conn:
            cursor = await conn.execute(query, params)
            await self._commit(conn)
            return cursor.lastrowid

    async def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[aiosqlite.Row]:
        """Fetch a single row."""
        async with self._connect() as conn:
            cursor = await conn.execute(query, params)
            return await cursor.fetchone()

    async def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[aiosqlite.Row]:
        """Fetch all rows."""
        async with self._connect() as conn:
            cursor = await conn.execute(query, params)
            return [row async for row in cursor]
