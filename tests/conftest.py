"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from core import CopyType, ParticipantStatus, PaymentMethod, PaymentType, StorageError
from database import Participant, Payment, SQLitePool, SQLiteStorage, run_migrations


@pytest.fixture
async def pool(tmp_path):
    """Migrated SQLite database in a temporary directory."""
    db_pool = SQLitePool(str(tmp_path / "club.sqlite"), pool_size=2, busy_timeout_ms=1000)
    await db_pool.init_pool()
    await run_migrations(db_pool)
    yield db_pool
    await db_pool.close()


@pytest.fixture
def storage(pool):
    return SQLiteStorage(pool)


@pytest.fixture
def make_participant(storage):
    """Insert a participant and return it with its id."""
    async def _make(
        name="Kim Cheolsu",
        status=ParticipantStatus.ACTIVE,
        next_payment_date=None,
        copy_type=CopyType.SMALL,
    ):
        participant = Participant(
            name=name,
            status=status,
            next_payment_date=next_payment_date,
            copy_type=copy_type,
        )
        await storage.save_participant(participant)
        return participant

    return _make


@pytest.fixture
def make_payment(storage):
    """Insert a payment directly, bypassing PaymentRecorder."""
    async def _make(
        participant_id,
        day=date(2024, 3, 2),
        amount=100000,
        payment_type=PaymentType.MONTHLY_FEE,
        method=PaymentMethod.CARD,
        settlement_date=None,
    ):
        payment = Payment(
            participant_id=participant_id,
            date=day,
            amount=amount,
            type=payment_type,
            method=method,
            settlement_date=settlement_date,
        )
        await storage.save_payment(payment)
        return payment

    return _make


class FailingStorage:
    """Wraps a storage and fails writes after a number of successful ones."""

    def __init__(self, inner, fail_after=0):
        self.inner = inner
        self.fail_after = fail_after
        self.writes = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    async def save_participant(self, participant):
        if self.writes >= self.fail_after:
            raise StorageError("disk I/O error")
        self.writes += 1
        return await self.inner.save_participant(participant)


@pytest.fixture
def failing_storage(storage):
    def _make(fail_after=0):
        return FailingStorage(storage, fail_after=fail_after)

    return _make


class SpyStorage:
    """Wraps a storage, records every write and fails the named methods."""

    def __init__(self, inner, fail_on=()):
        self.inner = inner
        self.fail_on = set(fail_on)
        self.writes = []

    def __getattr__(self, name):
        method = getattr(self.inner, name)
        if name in self.fail_on:
            async def failing(*args, **kwargs):
                raise StorageError(f"{name}: database disk image is malformed")
            return failing
        if name.startswith(("save_", "delete_")):
            async def recording(*args, **kwargs):
                self.writes.append(name)
                return await method(*args, **kwargs)
            return recording
        return method


@pytest.fixture
def spy_storage(storage):
    def _make(fail_on=()):
        return SpyStorage(storage, fail_on=fail_on)

    return _make
