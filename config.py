"""Application configuration module.

Reads settings from environment variables (and an optional ``.env`` file)
with defaults suited to a single administrator working on a local database.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.constants import DatabaseDefaults, MonthRollover, SettlementDefaults
from core.exceptions import ConfigurationError
from core.logger import resolve_level

# Load environment variables from .env file
load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    """Get integer from environment variable with fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str(name: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.getenv(name, default)


@dataclass(frozen=True)
class Config:
    environment: str
    debug: bool
    database_path: str
    db_pool_size: int
    db_busy_timeout: int
    log_folder: str
    log_level: str
    monthly_fee: int
    month_rollover: MonthRollover
    sweep_exempt_inactive: bool

    @property
    def log_file(self) -> str:
        return os.path.join(self.log_folder, "club_dues.log")


def load_config() -> Config:
    """Load application configuration from environment variables.

    Returns:
        Config: Application configuration with validated values

    Raises:
        ConfigurationError: If a value is present but unusable
    """
    rollover = _get_str("MONTH_ROLLOVER", MonthRollover.CLAMP.value).strip().lower()
    try:
        month_rollover = MonthRollover(rollover)
    except ValueError:
        raise ConfigurationError(
            f"MONTH_ROLLOVER must be one of "
            f"{', '.join(m.value for m in MonthRollover)}, got {rollover!r}"
        ) from None

    log_level = _get_str("LOG_LEVEL", "INFO").strip().upper()
    try:
        resolve_level(log_level)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from None

    config = Config(
        environment=_get_str("ENVIRONMENT", "development"),
        debug=_get_bool("DEBUG", False),
        database_path=_get_str("DATABASE_PATH", DatabaseDefaults.PATH),
        db_pool_size=_get_int("DB_POOL_SIZE", DatabaseDefaults.POOL_SIZE),
        db_busy_timeout=_get_int("DB_BUSY_TIMEOUT", DatabaseDefaults.BUSY_TIMEOUT),
        log_folder=_get_str("LOG_FOLDER", "logs"),
        log_level="DEBUG" if _get_bool("DEBUG", False) else log_level,
        monthly_fee=_get_int("MONTHLY_FEE", SettlementDefaults.MONTHLY_FEE),
        month_rollover=month_rollover,
        sweep_exempt_inactive=_get_bool("SWEEP_EXEMPT_INACTIVE", False),
    )

    if config.monthly_fee <= 0:
        raise ConfigurationError("MONTHLY_FEE must be a positive integer")
    if config.db_pool_size <= 0:
        raise ConfigurationError("DB_POOL_SIZE must be a positive integer")

    return config
