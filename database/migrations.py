"""Database schema migrations."""

from __future__ import annotations

import aiosqlite

from core.exceptions import StorageError
from core.logger import get_logger

from .connection import SQLitePool

logger = get_logger(__name__)


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS participants (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'active'
            CHECK(status IN ('active', 'inactive', 'lapsed')),
        next_payment_date TEXT,
        copy_type TEXT NOT NULL DEFAULT 'small',
        memo TEXT DEFAULT '',
        gender TEXT,
        student_phone TEXT,
        parent_phone TEXT,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_participants_name ON participants(name);",
    "CREATE INDEX IF NOT EXISTS idx_participants_status ON participants(status);",
    "CREATE INDEX IF NOT EXISTS idx_participants_next_payment ON participants(next_payment_date);",
    # Payments outlive their participant, so participant_id has no foreign key
    """
    CREATE TABLE IF NOT EXISTS payments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        participant_id INTEGER NOT NULL,
        payment_date TEXT NOT NULL,
        year INTEGER NOT NULL,
        month INTEGER NOT NULL,
        amount INTEGER NOT NULL CHECK(amount > 0),
        payment_type TEXT NOT NULL
            CHECK(payment_type IN ('monthly_fee', 'lesson_fee', 'other')),
        payment_method TEXT NOT NULL
            CHECK(payment_method IN ('card', 'cash', 'transfer', 'other')),
        settlement_date TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_payments_participant ON payments(participant_id);",
    "CREATE INDEX IF NOT EXISTS idx_payments_date ON payments(payment_date);",
    "CREATE INDEX IF NOT EXISTS idx_payments_year_month ON payments(year, month);",
)


async def run_migrations(pool: SQLitePool) -> None:
    async with pool.connection() as conn:
        await conn.execute("BEGIN")
        try:
            for statement in SCHEMA_SQL:
                await conn.execute(statement)
        except aiosqlite.Error as exc:
            await conn.rollback()
            raise StorageError(f"Schema migration failed: {exc}") from exc
        else:
            await conn.commit()
    logger.debug(f"Applied {len(SCHEMA_SQL)} schema statements")
