"""Application-wide exception classes."""

from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
    pass


class StorageError(ApplicationError):
    """Raised when the underlying storage layer fails."""
    pass


class ConnectionPoolError(StorageError):
    """Raised when database connection pool has issues."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class ValidationError(ServiceError):
    """Raised when caller-supplied data violates a contract."""
    pass


class NotFoundError(ServiceError):
    """Raised when a referenced participant or payment does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
