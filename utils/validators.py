"""Input validation helpers."""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Optional, Type, TypeVar

from core.exceptions import ValidationError
from utils.dates import DateLike, as_date

E = TypeVar("E", bound=Enum)

PHONE_SEPARATORS_RE = re.compile(r"[\s\-]")


def validate_name(value: Optional[str]) -> str:
    """Return the stripped display name, rejecting blanks."""
    if value is None or not str(value).strip():
        raise ValidationError("Participant name is required")
    return str(value).strip()


def normalize_phone(value: Optional[str]) -> Optional[str]:
    """Strip dashes and spaces from a phone number; blanks become None."""
    if value is None:
        return None
    clean_phone = PHONE_SEPARATORS_RE.sub("", str(value))
    return clean_phone or None


def validate_amount(value: object) -> int:
    """Payment amounts are positive whole currency units."""
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Amount must be a positive integer, got {value!r}")
    if value <= 0:
        raise ValidationError(f"Amount must be a positive integer, got {value}")
    return value


def validate_choice(enum_cls: Type[E], value: object, field: str) -> E:
    """Coerce ``value`` to a member of ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field} must be one of {allowed}, got {value!r}") from None


def validate_date(value: Optional[DateLike], field: str, required: bool = True) -> Optional[date]:
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required")
        return None
    try:
        return as_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO calendar date, got {value!r}") from None


def validate_month(year: object, month: object) -> tuple[int, int]:
    if isinstance(year, bool) or not isinstance(year, int) or year < 1:
        raise ValidationError(f"Year must be a positive integer, got {year!r}")
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month!r}")
    return year, month
