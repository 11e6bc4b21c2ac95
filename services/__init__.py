"""Services package."""

from .participant_service import ParticipantService
from .payment_recorder import PaymentRecorder
from .settlement import SettlementAggregator, is_due_on
from .status_engine import StatusEngine

__all__ = [
    "ParticipantService",
    "PaymentRecorder",
    "SettlementAggregator",
    "StatusEngine",
    "is_due_on",
]
