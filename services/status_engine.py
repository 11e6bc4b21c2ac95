"""Overdue sweep that moves participants with a missed payment to lapsed."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from core import ParticipantStatus, get_logger
from database.models import Participant
from database.storage import Storage
from utils.validators import validate_date

logger = get_logger(__name__)


class StatusEngine:
    """Keeps participant status in line with payment recency.

    There is no scheduler: callers run :meth:`sweep_overdue_participants`
    explicitly, typically once at application start.
    """

    def __init__(self, storage: Storage, exempt_inactive: bool = False) -> None:
        self.storage = storage
        self.exempt_inactive = exempt_inactive

    def is_overdue(self, participant: Participant, as_of: date) -> bool:
        if participant.next_payment_date is None:
            return False
        if participant.status is ParticipantStatus.LAPSED:
            return False
        if self.exempt_inactive and participant.status is ParticipantStatus.INACTIVE:
            return False
        return participant.next_payment_date < as_of

    async def sweep_overdue_participants(self, as_of: Union[date, datetime]) -> int:
        """Mark every overdue participant as lapsed.

        Args:
            as_of: The day treated as today; a time of day is ignored

        Returns:
            Number of participants whose status changed

        Raises:
            ValidationError: as_of is missing or not a calendar date
            StorageError: The first failed read/write; earlier updates stay written
        """
        as_of = validate_date(as_of, "As-of date")
        changed = 0

        for participant in await self.storage.list_participants():
            if not self.is_overdue(participant, as_of):
                continue
            previous = participant.status
            participant.status = ParticipantStatus.LAPSED
            await self.storage.save_participant(participant)
            changed += 1
            logger.info(
                f"Participant {participant.name} ({participant.id}) "
                f"{previous.value} -> lapsed, due {participant.next_payment_date}"
            )

        logger.info(f"Overdue sweep as of {as_of}: {changed} participant(s) lapsed")
        return changed
