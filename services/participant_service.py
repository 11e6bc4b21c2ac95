"""Participant administration: registration, edits, deletion and listing."""

from __future__ import annotations

import math
from typing import Sequence

from core import CopyType, NotFoundError, ParticipantStatus, ValidationError, get_logger
from database.models import Participant, ParticipantPage, ParticipantQuery
from database.storage import AdminStorage
from utils.validators import normalize_phone, validate_choice, validate_name

logger = get_logger(__name__)


class ParticipantService:
    """Administrator-facing operations on the participant roster."""

    def __init__(self, storage: AdminStorage) -> None:
        self.storage = storage

    @staticmethod
    def _normalize(participant: Participant) -> Participant:
        participant.name = validate_name(participant.name)
        participant.status = validate_choice(
            ParticipantStatus, participant.status or ParticipantStatus.ACTIVE, "Status"
        )
        participant.copy_type = validate_choice(
            CopyType, participant.copy_type or CopyType.SMALL, "Copy type"
        )
        participant.memo = (participant.memo or "").strip()
        participant.student_phone = normalize_phone(participant.student_phone)
        participant.parent_phone = normalize_phone(participant.parent_phone)
        return participant

    async def register_participant(self, participant: Participant) -> int:
        """Add a new participant; status defaults to active."""
        if participant.id is not None:
            raise ValidationError("A new participant must not carry an id")
        participant_id = await self.storage.save_participant(self._normalize(participant))
        logger.info(f"Registered participant {participant.name} ({participant_id})")
        return participant_id

    async def get_participant(self, participant_id: int) -> Participant:
        participant = await self.storage.get_participant(participant_id)
        if participant is None:
            raise NotFoundError("Participant", participant_id)
        return participant

    async def update_participant(self, participant: Participant) -> None:
        """Replace a participant's fields, including a manual status override."""
        if participant.id is None:
            raise ValidationError("Participant id is required for an update")
        await self.get_participant(participant.id)
        await self.storage.save_participant(self._normalize(participant))

    async def delete_participant(self, participant_id: int) -> None:
        await self.get_participant(participant_id)
        await self.storage.delete_participant(participant_id)
        logger.info(f"Deleted participant {participant_id}")

    async def delete_participants(self, participant_ids: Sequence[int]) -> int:
        """Delete several participants; unknown ids are ignored."""
        deleted = await self.storage.delete_participants(list(participant_ids))
        logger.info(f"Deleted {deleted} participant(s)")
        return deleted

    async def delete_all_participants(self) -> int:
        deleted = await self.storage.delete_all_participants()
        logger.warning(f"Deleted all {deleted} participant(s)")
        return deleted

    async def list_participants(self, query: ParticipantQuery) -> ParticipantPage:
        """Filter by status/copy type and return one page.

        Out of range pages are clamped to the first or last page.
        """
        if query.per_page < 1:
            raise ValidationError("per_page must be at least 1")

        if query.status is not None:
            participants = await self.storage.list_participants_by_status(
                validate_choice(ParticipantStatus, query.status, "Status")
            )
        else:
            participants = await self.storage.list_participants()

        if query.copy_type is not None:
            copy_type = validate_choice(CopyType, query.copy_type, "Copy type")
            participants = [p for p in participants if p.copy_type is copy_type]

        total = len(participants)
        total_pages = max(1, math.ceil(total / query.per_page))
        page = min(max(query.page, 1), total_pages)
        start = (page - 1) * query.per_page

        return ParticipantPage(
            items=participants[start:start + query.per_page],
            page=page,
            per_page=query.per_page,
            total=total,
            total_pages=total_pages,
        )
