"""Payment entry: validate, store, roll the schedule over and reactivate."""

from __future__ import annotations

from datetime import date
from typing import List

from core import (
    MonthRollover,
    NotFoundError,
    ParticipantStatus,
    PaymentMethod,
    PaymentType,
    ValidationError,
    get_logger,
)
from database.models import Payment, PaymentRecord
from database.storage import AdminStorage, Storage, SupportsTransactions
from utils.dates import add_months
from utils.validators import validate_amount, validate_choice, validate_date

logger = get_logger(__name__)


class PaymentRecorder:
    """Records payments and advances each participant's next due date."""

    def __init__(self, storage: AdminStorage, rollover: MonthRollover = MonthRollover.CLAMP) -> None:
        self.storage = storage
        self.rollover = rollover

    @staticmethod
    def build_payment(record: PaymentRecord) -> Payment:
        """Validate caller input and turn it into an unsaved Payment.

        Raises:
            ValidationError: Non-positive or non-integer amount, unknown
                type/method, missing or malformed dates
        """
        return Payment(
            participant_id=record.participant_id,
            date=validate_date(record.date, "Payment date"),
            amount=validate_amount(record.amount),
            type=validate_choice(PaymentType, record.type, "Payment type"),
            method=validate_choice(PaymentMethod, record.method, "Payment method"),
            settlement_date=validate_date(record.settlement_date, "Settlement date", required=False),
        )

    async def record_payment(self, record: PaymentRecord) -> int:
        """Store a payment and reactivate its participant.

        The participant's next payment date becomes the payment date plus
        one calendar month and the status becomes active regardless of the
        previous status (a manual ``inactive`` is overridden too).

        Both writes share one transaction when the storage supports it.
        Otherwise a failure between them leaves the payment stored with the
        schedule not yet rolled over.

        Returns:
            Id of the new payment

        Raises:
            ValidationError: Invalid input; nothing is written
            NotFoundError: Unknown participant; nothing is written
            StorageError: Storage failure
        """
        payment = self.build_payment(record)
        next_payment_date = self.next_payment_date(payment.date)

        participant = await self.storage.get_participant(payment.participant_id)
        if participant is None:
            raise NotFoundError("Participant", payment.participant_id)

        if isinstance(self.storage, SupportsTransactions):
            async with self.storage.transaction() as tx:
                payment_id = await self._apply(tx, payment, next_payment_date)
        else:
            payment_id = await self._apply(self.storage, payment, next_payment_date)

        logger.info(
            f"Recorded payment {payment_id}: participant {payment.participant_id}, "
            f"{payment.amount} {payment.type.value}/{payment.method.value} on {payment.date}"
        )
        return payment_id

    def next_payment_date(self, paid_on: date) -> date:
        """One calendar month after ``paid_on`` under the rollover policy."""
        try:
            return add_months(paid_on, 1, self.rollover)
        except (ValueError, OverflowError):
            raise ValidationError(
                f"Payment date {paid_on} leaves no representable next payment date"
            ) from None

    async def _apply(self, storage: Storage, payment: Payment, next_payment_date: date) -> int:
        payment_id = await storage.save_payment(payment)

        # Re-read inside the transaction so the update works on current data
        participant = await storage.get_participant(payment.participant_id)
        if participant is None:
            raise NotFoundError("Participant", payment.participant_id)
        participant.next_payment_date = next_payment_date
        participant.status = ParticipantStatus.ACTIVE
        await storage.save_participant(participant)
        return payment_id

    async def get_payment_history(self, participant_id: int) -> List[Payment]:
        """All payments of one participant, oldest first."""
        if await self.storage.get_participant(participant_id) is None:
            raise NotFoundError("Participant", participant_id)
        return await self.storage.list_payments_by_participant(participant_id)

    async def update_payment(self, payment: Payment) -> None:
        """Correct a stored payment in place.

        Amount, type, method and dates go through the same checks as a new
        payment. The participant's schedule and status are not touched.

        Raises:
            ValidationError: Missing id or invalid field values
            NotFoundError: No payment with that id
        """
        if payment.id is None:
            raise ValidationError("Payment id is required for an update")
        if await self.storage.get_payment(payment.id) is None:
            raise NotFoundError("Payment", payment.id)

        updated = self.build_payment(PaymentRecord(
            participant_id=payment.participant_id,
            date=payment.date,
            amount=payment.amount,
            type=payment.type,
            method=payment.method,
            settlement_date=payment.settlement_date,
        ))
        updated.id = payment.id
        await self.storage.save_payment(updated)
        logger.info(f"Updated payment {payment.id}")

    async def delete_payment(self, payment_id: int) -> None:
        """Remove a payment record.

        The participant's next payment date and status are left as they are.
        """
        if await self.storage.get_payment(payment_id) is None:
            raise NotFoundError("Payment", payment_id)
        await self.storage.delete_payment(payment_id)
        logger.info(f"Deleted payment {payment_id}")
