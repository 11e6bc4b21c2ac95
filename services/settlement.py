"""Read-only daily and monthly settlement reports."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from core import ParticipantStatus, PaymentType, SettlementDefaults, get_logger
from database.models import DailyPayments, MonthlySettlementSummary, Participant
from database.storage import Storage
from utils.validators import validate_date, validate_month

logger = get_logger(__name__)


def is_due_on(participant: Participant, day: date) -> bool:
    """Whether an unpaid participant belongs on the outstanding list for ``day``.

    Lapsed participants stay outstanding from their due date onwards; anyone
    not active is outstanding on the exact due date. Active participants are
    never listed here.
    """
    due = participant.next_payment_date
    if due is None:
        return False
    if participant.status is ParticipantStatus.LAPSED and due <= day:
        return True
    return due == day and participant.status is not ParticipantStatus.ACTIVE


class SettlementAggregator:
    """Computes payment summaries. Never writes to storage."""

    def __init__(self, storage: Storage, monthly_fee: int = SettlementDefaults.MONTHLY_FEE) -> None:
        self.storage = storage
        self.monthly_fee = monthly_fee

    async def get_payments_by_date(self, day: Union[date, datetime, str]) -> DailyPayments:
        """Split participants into those who paid on ``day`` and those outstanding.

        Participants with no payment that day and no obligation that day are
        left out of both lists.

        Raises:
            ValidationError: day is missing or not a calendar date
            StorageError: Storage failure
        """
        day = validate_date(day, "Date")
        payments = await self.storage.list_payments_by_date(day)
        participants = await self.storage.list_participants()

        paid_ids = {payment.participant_id for payment in payments}
        result = DailyPayments()
        for participant in participants:
            if participant.id in paid_ids:
                result.paid.append(participant)
            elif is_due_on(participant, day):
                result.unpaid.append(participant)

        logger.debug(f"Payments on {day}: {len(result.paid)} paid, {len(result.unpaid)} outstanding")
        return result

    async def get_monthly_settlement_summary(self, year: int, month: int) -> MonthlySettlementSummary:
        """Totals for one calendar month.

        Expected revenue is the flat fee for every currently active
        participant plus the lesson fees actually taken in the month. The
        lapsed list reflects current status, not status as of that month.

        Raises:
            ValidationError: Month outside 1..12 or non-positive year
            StorageError: Storage failure
        """
        year, month = validate_month(year, month)
        payments = await self.storage.list_payments_by_month(year, month)
        participants = await self.storage.list_participants()

        total_actual = sum(payment.amount for payment in payments)
        total_settled = sum(payment.amount for payment in payments if payment.is_settled)
        lesson_income = sum(
            payment.amount for payment in payments
            if payment.type is PaymentType.LESSON_FEE
        )

        active_count = sum(1 for p in participants if p.status is ParticipantStatus.ACTIVE)
        lapsed = [p for p in participants if p.status is ParticipantStatus.LAPSED]

        return MonthlySettlementSummary(
            year=year,
            month=month,
            total_expected_revenue=active_count * self.monthly_fee + lesson_income,
            total_actual_payment=total_actual,
            total_settled_amount=total_settled,
            lapsed_participants=lapsed,
            total_lapsed_amount=len(lapsed) * self.monthly_fee,
        )
