"""Data access layer models and their row mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from core.constants import CopyType, PagingDefaults, ParticipantStatus, PaymentMethod, PaymentType


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(slots=True)
class Participant:
    name: str
    status: ParticipantStatus = ParticipantStatus.ACTIVE
    next_payment_date: Optional[date] = None
    copy_type: CopyType = CopyType.SMALL
    memo: str = ""
    gender: Optional[str] = None
    student_phone: Optional[str] = None
    parent_phone: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Participant":
        return cls(
            id=row["id"],
            name=row["name"],
            status=ParticipantStatus(row["status"]),
            next_payment_date=_parse_date(row["next_payment_date"]),
            copy_type=CopyType(row["copy_type"]),
            memo=row["memo"] or "",
            gender=row["gender"],
            student_phone=row["student_phone"],
            parent_phone=row["parent_phone"],
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "next_payment_date": _format_date(self.next_payment_date),
            "copy_type": self.copy_type.value,
            "memo": self.memo,
            "gender": self.gender,
            "student_phone": self.student_phone,
            "parent_phone": self.parent_phone,
        }

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self.to_row()}


@dataclass(slots=True)
class Payment:
    participant_id: int
    date: date
    amount: int
    type: PaymentType
    method: PaymentMethod
    settlement_date: Optional[date] = None
    id: Optional[int] = None

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def is_settled(self) -> bool:
        return self.settlement_date is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Payment":
        return cls(
            id=row["id"],
            participant_id=row["participant_id"],
            date=date.fromisoformat(row["payment_date"]),
            amount=row["amount"],
            type=PaymentType(row["payment_type"]),
            method=PaymentMethod(row["payment_method"]),
            settlement_date=_parse_date(row["settlement_date"]),
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "payment_date": self.date.isoformat(),
            "year": self.year,
            "month": self.month,
            "amount": self.amount,
            "payment_type": self.type.value,
            "payment_method": self.method.value,
            "settlement_date": _format_date(self.settlement_date),
        }

    def to_dict(self) -> dict[str, Any]:
        row = self.to_row()
        return {
            "id": self.id,
            "participant_id": self.participant_id,
            "date": row["payment_date"],
            "amount": self.amount,
            "type": row["payment_type"],
            "method": row["payment_method"],
            "settlement_date": row["settlement_date"],
        }


@dataclass(slots=True)
class PaymentRecord:
    """Caller input for recording a payment; values are validated on use."""
    participant_id: int
    date: Any
    amount: Any
    type: Any = PaymentType.MONTHLY_FEE
    method: Any = PaymentMethod.CASH
    settlement_date: Any = None


@dataclass(slots=True)
class ParticipantQuery:
    """Filter and paging options for the participant list."""
    status: Optional[ParticipantStatus] = None
    copy_type: Optional[CopyType] = None
    page: int = 1
    per_page: int = PagingDefaults.PER_PAGE


@dataclass(slots=True)
class ParticipantPage:
    items: list[Participant]
    page: int
    per_page: int
    total: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [p.to_dict() for p in self.items],
            "page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "total_pages": self.total_pages,
        }


@dataclass(slots=True)
class DailyPayments:
    paid: list[Participant] = field(default_factory=list)
    unpaid: list[Participant] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "paid": [p.to_dict() for p in self.paid],
            "unpaid": [p.to_dict() for p in self.unpaid],
        }


@dataclass(slots=True)
class MonthlySettlementSummary:
    year: int
    month: int
    total_expected_revenue: int
    total_actual_payment: int
    total_settled_amount: int
    lapsed_participants: list[Participant]
    total_lapsed_amount: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "total_expected_revenue": self.total_expected_revenue,
            "total_actual_payment": self.total_actual_payment,
            "total_settled_amount": self.total_settled_amount,
            "lapsed_participants": [p.to_dict() for p in self.lapsed_participants],
            "total_lapsed_amount": self.total_lapsed_amount,
        }
