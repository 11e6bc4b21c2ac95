"""Database access layer helpers."""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from core.constants import ParticipantStatus
from database.base_repository import BaseRepository
from database.models import Participant, Payment

PARTICIPANT_COLUMNS = (
    "name", "status", "next_payment_date", "copy_type", "memo",
    "gender", "student_phone", "parent_phone",
)
PAYMENT_COLUMNS = (
    "participant_id", "payment_date", "year", "month", "amount",
    "payment_type", "payment_method", "settlement_date",
)


def _insert_sql(table: str, columns: Sequence[str]) -> str:
    placeholders = ", ".join(["?"] * len(columns))
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"


def _update_sql(table: str, columns: Sequence[str], extra: str = "") -> str:
    assignments = ", ".join(f"{column}=?" for column in columns)
    return f"UPDATE {table} SET {assignments}{extra} WHERE id=?"


class ParticipantRepository(BaseRepository):
    """Repository for participant operations."""

    async def list_all(self) -> List[Participant]:
        rows = await self.fetch_all("SELECT * FROM participants ORDER BY id")
        return [Participant.from_row(row) for row in rows]

    async def list_by_status(self, status: ParticipantStatus) -> List[Participant]:
        rows = await self.fetch_all(
            "SELECT * FROM participants WHERE status=? ORDER BY id",
            (status.value,)
        )
        return [Participant.from_row(row) for row in rows]

    async def get(self, participant_id: int) -> Optional[Participant]:
        row = await self.fetch_one(
            "SELECT * FROM participants WHERE id=?",
            (participant_id,)
        )
        return Participant.from_row(row) if row else None

    async def save(self, participant: Participant) -> int:
        """Insert when the participant has no id yet, otherwise replace it."""
        row = participant.to_row()
        values = [row[column] for column in PARTICIPANT_COLUMNS]

        if participant.id is None:
            participant.id = await self.insert(
                _insert_sql("participants", PARTICIPANT_COLUMNS), values
            )
            return participant.id

        updated = await self.execute(
            _update_sql("participants", PARTICIPANT_COLUMNS, ", updated_at=CURRENT_TIMESTAMP"),
            (*values, participant.id)
        )
        if updated == 0:
            # Keyed by id: an unknown id is stored under that id
            await self.insert(
                _insert_sql("participants", ("id", *PARTICIPANT_COLUMNS)),
                (participant.id, *values)
            )
        return participant.id

    async def delete(self, participant_id: int) -> int:
        return await self.execute("DELETE FROM participants WHERE id=?", (participant_id,))

    async def delete_many(self, participant_ids: Sequence[int]) -> int:
        if not participant_ids:
            return 0
        placeholders = ",".join(["?"] * len(participant_ids))
        return await self.execute(
            f"DELETE FROM participants WHERE id IN ({placeholders})",
            tuple(participant_ids)
        )

    async def delete_all(self) -> int:
        return await self.execute("DELETE FROM participants")


class PaymentRepository(BaseRepository):
    """Repository for payment operations."""

    async def get(self, payment_id: int) -> Optional[Payment]:
        row = await self.fetch_one("SELECT * FROM payments WHERE id=?", (payment_id,))
        return Payment.from_row(row) if row else None

    async def list_by_date(self, day: date) -> List[Payment]:
        rows = await self.fetch_all(
            "SELECT * FROM payments WHERE payment_date=? ORDER BY id",
            (day.isoformat(),)
        )
        return [Payment.from_row(row) for row in rows]

    async def list_by_month(self, year: int, month: int) -> List[Payment]:
        rows = await self.fetch_all(
            "SELECT * FROM payments WHERE year=? AND month=? ORDER BY payment_date, id",
            (year, month)
        )
        return [Payment.from_row(row) for row in rows]

    async def list_by_participant(self, participant_id: int) -> List[Payment]:
        rows = await self.fetch_all(
            "SELECT * FROM payments WHERE participant_id=? ORDER BY payment_date, id",
            (participant_id,)
        )
        return [Payment.from_row(row) for row in rows]

    async def save(self, payment: Payment) -> int:
        row = payment.to_row()
        values = [row[column] for column in PAYMENT_COLUMNS]

        if payment.id is None:
            payment.id = await self.insert(_insert_sql("payments", PAYMENT_COLUMNS), values)
            return payment.id

        updated = await self.execute(
            _update_sql("payments", PAYMENT_COLUMNS), (*values, payment.id)
        )
        if updated == 0:
            await self.insert(
                _insert_sql("payments", ("id", *PAYMENT_COLUMNS)),
                (payment.id, *values)
            )
        return payment.id

    async def delete(self, payment_id: int) -> int:
        return await self.execute("DELETE FROM payments WHERE id=?", (payment_id,))
