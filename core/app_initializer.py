"""Application initialization orchestrator."""

from __future__ import annotations

from datetime import date
from typing import Optional

from config import Config, load_config
from core.logger import get_logger
from database import SQLitePool, SQLiteStorage, close_db_pool, init_db_pool, run_migrations
from services import ParticipantService, PaymentRecorder, SettlementAggregator, StatusEngine

logger = get_logger(__name__)


class ApplicationInitializer:
    """Wires storage into the rules services and owns their lifecycle."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or load_config()
        self.db_pool: Optional[SQLitePool] = None
        self.storage: Optional[SQLiteStorage] = None
        self.status_engine: Optional[StatusEngine] = None
        self.payment_recorder: Optional[PaymentRecorder] = None
        self.settlement: Optional[SettlementAggregator] = None
        self.participants: Optional[ParticipantService] = None

    async def initialize(self) -> None:
        """Open the database and build the services."""
        await self._init_database()
        self._init_services()

    async def startup_sweep(self, as_of: Optional[date] = None) -> int:
        """Run the once-per-session overdue sweep."""
        return await self.status_engine.sweep_overdue_participants(as_of or date.today())

    async def cleanup(self) -> None:
        """Cleanup resources."""
        if self.db_pool:
            await close_db_pool()
            self.db_pool = None

    async def __aenter__(self) -> "ApplicationInitializer":
        try:
            await self.initialize()
        except BaseException:
            await self.cleanup()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def _init_database(self) -> None:
        """Initialize database pool and run migrations."""
        self.db_pool = await init_db_pool(
            database_path=self.config.database_path,
            pool_size=self.config.db_pool_size,
            busy_timeout_ms=self.config.db_busy_timeout,
        )
        await run_migrations(self.db_pool)
        self.storage = SQLiteStorage(self.db_pool)
        logger.info(f"✅ Database ready at {self.config.database_path}")

    def _init_services(self) -> None:
        self.status_engine = StatusEngine(
            self.storage,
            exempt_inactive=self.config.sweep_exempt_inactive,
        )
        self.payment_recorder = PaymentRecorder(self.storage, rollover=self.config.month_rollover)
        self.settlement = SettlementAggregator(self.storage, monthly_fee=self.config.monthly_fee)
        self.participants = ParticipantService(self.storage)
        logger.debug("Services initialized")
