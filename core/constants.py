"""Application-wide constants and configuration values."""

from __future__ import annotations

from enum import Enum


# Database constants
class DatabaseDefaults:
    """Default database configuration."""
    PATH = "data/club_dues.sqlite"
    POOL_SIZE = 4
    BUSY_TIMEOUT = 5000  # milliseconds


# Settlement constants
class SettlementDefaults:
    """Assumed flat monthly fee used for expected/lapsed revenue."""
    MONTHLY_FEE = 50000


# Participant list paging
class PagingDefaults:
    PER_PAGE = 10


# Status enums
class ParticipantStatus(str, Enum):
    """Participant membership status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    LAPSED = "lapsed"


class PaymentType(str, Enum):
    """What a payment was for."""
    MONTHLY_FEE = "monthly_fee"
    LESSON_FEE = "lesson_fee"
    OTHER = "other"


class PaymentMethod(str, Enum):
    """How a payment was made."""
    CARD = "card"
    CASH = "cash"
    TRANSFER = "transfer"
    OTHER = "other"


class CopyType(str, Enum):
    """Roster group a participant belongs to."""
    SMALL = "small"
    LARGE = "large"


class MonthRollover(str, Enum):
    """How a day-of-month that does not exist in the target month is handled.

    CLAMP moves Jan 31 to the last day of February. OVERFLOW spills the
    extra days into the following month (Jan 31 -> Mar 3 in a common year).
    """
    CLAMP = "clamp"
    OVERFLOW = "overflow"
