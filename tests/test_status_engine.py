"""Unit tests for StatusEngine."""

from datetime import date, datetime

import pytest

from core import ParticipantStatus, StorageError, ValidationError
from services.status_engine import StatusEngine


@pytest.mark.asyncio
async def test_sweep_marks_overdue_participants_lapsed(storage, make_participant):
    overdue = await make_participant("Overdue", next_payment_date=date(2024, 3, 1))
    current = await make_participant("Current", next_payment_date=date(2024, 3, 2))

    changed = await StatusEngine(storage).sweep_overdue_participants(date(2024, 3, 2))

    assert changed == 1
    assert (await storage.get_participant(overdue.id)).status is ParticipantStatus.LAPSED
    # Due today is not overdue
    assert (await storage.get_participant(current.id)).status is ParticipantStatus.ACTIVE


@pytest.mark.asyncio
async def test_sweep_is_idempotent(storage, make_participant):
    await make_participant("A", next_payment_date=date(2024, 1, 10))
    await make_participant("B", next_payment_date=date(2024, 2, 10))
    engine = StatusEngine(storage)

    assert await engine.sweep_overdue_participants(date(2024, 3, 1)) == 2
    assert await engine.sweep_overdue_participants(date(2024, 3, 1)) == 0


@pytest.mark.asyncio
async def test_sweep_skips_participants_without_schedule(storage, make_participant):
    unscheduled = await make_participant("No schedule", next_payment_date=None)

    assert await StatusEngine(storage).sweep_overdue_participants(date(2030, 1, 1)) == 0
    assert (await storage.get_participant(unscheduled.id)).status is ParticipantStatus.ACTIVE


@pytest.mark.asyncio
async def test_sweep_only_ever_moves_into_lapsed(storage, make_participant):
    inactive = await make_participant(
        "Inactive", status=ParticipantStatus.INACTIVE, next_payment_date=date(2024, 1, 1)
    )
    future_inactive = await make_participant(
        "Inactive later", status=ParticipantStatus.INACTIVE, next_payment_date=date(2024, 6, 1)
    )
    lapsed = await make_participant(
        "Lapsed", status=ParticipantStatus.LAPSED, next_payment_date=date(2024, 1, 1)
    )

    changed = await StatusEngine(storage).sweep_overdue_participants(date(2024, 3, 1))

    # Inactive is not protected from the sweep
    assert changed == 1
    assert (await storage.get_participant(inactive.id)).status is ParticipantStatus.LAPSED
    assert (await storage.get_participant(future_inactive.id)).status is ParticipantStatus.INACTIVE
    assert (await storage.get_participant(lapsed.id)).status is ParticipantStatus.LAPSED


@pytest.mark.asyncio
async def test_sweep_can_exempt_inactive(storage, make_participant):
    inactive = await make_participant(
        "Inactive", status=ParticipantStatus.INACTIVE, next_payment_date=date(2024, 1, 1)
    )

    engine = StatusEngine(storage, exempt_inactive=True)

    assert await engine.sweep_overdue_participants(date(2024, 3, 1)) == 0
    assert (await storage.get_participant(inactive.id)).status is ParticipantStatus.INACTIVE


@pytest.mark.asyncio
async def test_sweep_ignores_time_of_day(storage, make_participant):
    due_today = await make_participant("Due today", next_payment_date=date(2024, 3, 2))

    changed = await StatusEngine(storage).sweep_overdue_participants(datetime(2024, 3, 2, 23, 59))

    assert changed == 0
    assert (await storage.get_participant(due_today.id)).status is ParticipantStatus.ACTIVE


@pytest.mark.asyncio
async def test_sweep_aborts_on_storage_failure(storage, make_participant, failing_storage):
    first = await make_participant("First", next_payment_date=date(2024, 1, 1))
    second = await make_participant("Second", next_payment_date=date(2024, 1, 1))

    engine = StatusEngine(failing_storage(fail_after=1))

    with pytest.raises(StorageError):
        await engine.sweep_overdue_participants(date(2024, 3, 1))

    # The first write stays, the second never happened
    assert (await storage.get_participant(first.id)).status is ParticipantStatus.LAPSED
    assert (await storage.get_participant(second.id)).status is ParticipantStatus.ACTIVE


def test_is_overdue_rules():
    from database import Participant

    engine = StatusEngine(storage=None)
    as_of = date(2024, 3, 2)

    assert engine.is_overdue(Participant("a", next_payment_date=date(2024, 3, 1)), as_of)
    assert not engine.is_overdue(Participant("b", next_payment_date=as_of), as_of)
    assert not engine.is_overdue(Participant("c"), as_of)
    assert not engine.is_overdue(
        Participant("d", status=ParticipantStatus.LAPSED, next_payment_date=date(2024, 1, 1)), as_of
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("as_of", [None, "2024-02-30", 1709337600])
async def test_sweep_rejects_invalid_as_of(storage, make_participant, as_of):
    participant = await make_participant(next_payment_date=date(2024, 1, 1))

    with pytest.raises(ValidationError):
        await StatusEngine(storage).sweep_overdue_participants(as_of)

    assert (await storage.get_participant(participant.id)).status is ParticipantStatus.ACTIVE
