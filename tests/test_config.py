"""Tests for environment configuration."""

import pytest

from config import load_config
from core import ConfigurationError, MonthRollover

ENV_VARS = (
    "ENVIRONMENT", "DEBUG", "DATABASE_PATH", "DB_POOL_SIZE", "DB_BUSY_TIMEOUT",
    "LOG_FOLDER", "LOG_LEVEL", "MONTHLY_FEE", "MONTH_ROLLOVER", "SWEEP_EXEMPT_INACTIVE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config.environment == "development"
    assert config.debug is False
    assert config.database_path == "data/club_dues.sqlite"
    assert config.db_pool_size == 4
    assert config.db_busy_timeout == 5000
    assert config.log_level == "INFO"
    assert config.monthly_fee == 50000
    assert config.month_rollover is MonthRollover.CLAMP
    assert config.sweep_exempt_inactive is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("MONTHLY_FEE", "70000")
    monkeypatch.setenv("MONTH_ROLLOVER", "Overflow")
    monkeypatch.setenv("SWEEP_EXEMPT_INACTIVE", "yes")
    monkeypatch.setenv("LOG_FOLDER", "/var/log/club")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    config = load_config()

    assert config.monthly_fee == 70000
    assert config.month_rollover is MonthRollover.OVERFLOW
    assert config.sweep_exempt_inactive is True
    assert config.log_level == "WARNING"
    assert config.log_file == "/var/log/club/club_dues.log"


def test_debug_forces_debug_logging(monkeypatch):
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    assert load_config().log_level == "DEBUG"


def test_unparsable_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("DB_POOL_SIZE", "many")

    assert load_config().db_pool_size == 4


@pytest.mark.parametrize("name, value", [
    ("MONTH_ROLLOVER", "round"),
    ("LOG_LEVEL", "LOUD"),
    ("MONTHLY_FEE", "0"),
    ("DB_POOL_SIZE", "-2"),
])
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        load_config()
