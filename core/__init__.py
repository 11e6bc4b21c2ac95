"""Core application components."""

# ApplicationInitializer lives in core.app_initializer and is imported from
# there directly; it depends on database/services, which depend on core.
from core.logger import setup_logger, get_logger
from core.constants import (
    DatabaseDefaults,
    SettlementDefaults,
    PagingDefaults,
    ParticipantStatus,
    PaymentType,
    PaymentMethod,
    CopyType,
    MonthRollover,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    StorageError,
    ConnectionPoolError,
    ServiceError,
    ValidationError,
    NotFoundError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'DatabaseDefaults',
    'SettlementDefaults',
    'PagingDefaults',
    'ParticipantStatus',
    'PaymentType',
    'PaymentMethod',
    'CopyType',
    'MonthRollover',
    # Exceptions
    'ApplicationError',
    'ConfigurationError',
    'StorageError',
    'ConnectionPoolError',
    'ServiceError',
    'ValidationError',
    'NotFoundError',
]
