"""Storage contract consumed by the rules services, and its SQLite implementation."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, List, Optional, Protocol, Sequence, runtime_checkable

import aiosqlite

from core.constants import ParticipantStatus
from core.exceptions import StorageError
from database.connection import SQLitePool, get_db_pool
from database.models import Participant, Payment
from database.repositories import ParticipantRepository, PaymentRepository


class Storage(Protocol):
    """Record store the rules services read and write through."""

    async def list_participants(self) -> List[Participant]: ...

    async def get_participant(self, participant_id: int) -> Optional[Participant]: ...

    async def save_participant(self, participant: Participant) -> int: ...

    async def delete_participant(self, participant_id: int) -> None: ...

    async def list_payments_by_date(self, day: date) -> List[Payment]: ...

    async def list_payments_by_month(self, year: int, month: int) -> List[Payment]: ...

    async def save_payment(self, payment: Payment) -> int: ...


class AdminStorage(Storage, Protocol):
    """Storage plus the roster and payment maintenance lookups."""

    async def list_participants_by_status(self, status: ParticipantStatus) -> List[Participant]: ...

    async def delete_participants(self, participant_ids: Sequence[int]) -> int: ...

    async def delete_all_participants(self) -> int: ...

    async def get_payment(self, payment_id: int) -> Optional[Payment]: ...

    async def list_payments_by_participant(self, participant_id: int) -> List[Payment]: ...

    async def delete_payment(self, payment_id: int) -> None: ...


@runtime_checkable
class SupportsTransactions(Protocol):
    """A storage that can scope several writes into one atomic unit."""

    def transaction(self) -> AsyncContextManager["Storage"]: ...


class SQLiteStorage:
    """Storage backed by the pooled SQLite database."""

    def __init__(
        self,
        pool: Optional[SQLitePool] = None,
        conn: Optional[aiosqlite.Connection] = None,
    ) -> None:
        self.pool = pool or get_db_pool()
        self._conn = conn
        self.participants = ParticipantRepository(self.pool, conn)
        self.payments = PaymentRepository(self.pool, conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["SQLiteStorage"]:
        """Yield a storage whose writes commit together or not at all."""
        if self._conn is not None:
            # Already inside a transaction; join it
            yield self
            return

        async with self.pool.connection() as conn:
            try:
                await conn.execute("BEGIN")
            except aiosqlite.Error as exc:
                raise StorageError(str(exc)) from exc
            try:
                yield SQLiteStorage(self.pool, conn)
            except BaseException:
                await conn.rollback()
                raise
            else:
                try:
                    await conn.commit()
                except aiosqlite.Error as exc:
                    await conn.rollback()
                    raise StorageError(str(exc)) from exc

    # Participants

    async def list_participants(self) -> List[Participant]:
        return await self.participants.list_all()

    async def list_participants_by_status(self, status: ParticipantStatus) -> List[Participant]:
        return await self.participants.list_by_status(status)

    async def get_participant(self, participant_id: int) -> Optional[Participant]:
        return await self.participants.get(participant_id)

    async def save_participant(self, participant: Participant) -> int:
        return await self.participants.save(participant)

    async def delete_participant(self, participant_id: int) -> None:
        await self.participants.delete(participant_id)

    async def delete_participants(self, participant_ids: Sequence[int]) -> int:
        return await self.participants.delete_many(participant_ids)

    async def delete_all_participants(self) -> int:
        return await self.participants.delete_all()

    # Payments

    async def get_payment(self, payment_id: int) -> Optional[Payment]:
        return await self.payments.get(payment_id)

    async def list_payments_by_date(self, day: date) -> List[Payment]:
        return await self.payments.list_by_date(day)

    async def list_payments_by_month(self, year: int, month: int) -> List[Payment]:
        return await self.payments.list_by_month(year, month)

    async def list_payments_by_participant(self, participant_id: int) -> List[Payment]:
        return await self.payments.list_by_participant(participant_id)

    async def save_payment(self, payment: Payment) -> int:
        return await self.payments.save(payment)

    async def delete_payment(self, payment_id: int) -> None:
        await self.payments.delete(payment_id)
