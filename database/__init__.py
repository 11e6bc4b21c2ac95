"""Database package public API."""

from .connection import SQLitePool, close_db_pool, get_db_pool, init_db_pool
from .migrations import run_migrations
from .models import (
    DailyPayments,
    MonthlySettlementSummary,
    Participant,
    ParticipantPage,
    ParticipantQuery,
    Payment,
    PaymentRecord,
)
from .storage import AdminStorage, SQLiteStorage, Storage, SupportsTransactions

__all__ = [
    "SQLitePool",
    "close_db_pool",
    "get_db_pool",
    "init_db_pool",
    "run_migrations",
    "DailyPayments",
    "MonthlySettlementSummary",
    "Participant",
    "ParticipantPage",
    "ParticipantQuery",
    "Payment",
    "PaymentRecord",
    "AdminStorage",
    "SQLiteStorage",
    "Storage",
    "SupportsTransactions",
]
