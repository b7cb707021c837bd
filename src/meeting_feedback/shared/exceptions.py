"""
Shared exception definitions.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class ValidationError(AppException):
    """Missing or out-of-range input."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="VALIDATION_ERROR", status_code=400, details=details)


class NotFoundError(AppException):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="NOT_FOUND", status_code=404, details=details)


class ConflictError(AppException):
    """State transition not allowed, e.g. resubmitting a completed survey."""

    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="CONFLICT", status_code=409, details=details)


class AuthenticationError(AppException):
    """Authentication error."""

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="AUTHENTICATION_ERROR", status_code=401, details=details)


class StorageError(AppException):
    """Connectivity loss or constraint failure in the persistence layer."""

    def __init__(self, message: str = "Storage error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="STORAGE_ERROR", status_code=500, details=details)


class UniqueViolationError(StorageError):
    """A write collided with a declared unique constraint."""

    def __init__(self, message: str = "Unique constraint violated", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)
        self.code = "UNIQUE_VIOLATION"


class DeliveryError(AppException):
    """Email provider failure."""

    def __init__(self, message: str = "Email delivery failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)
        self.code = "DELIVERY_ERROR"
        self.status_code = 502
