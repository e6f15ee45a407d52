"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class WeekplanError(Exception):
    """Base exception for weekplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(WeekplanError):
    """Resource not found."""

    pass


class ValidationError(WeekplanError):
    """Malformed date/time, non-business day or inverted interval."""

    pass


class ConflictError(WeekplanError):
    """Target slot overlaps an existing schedule entry."""

    def __init__(self, message: str, conflicting_entry_ids: Optional[list[int]] = None):
        super().__init__(message, details={"conflicting_entry_ids": conflicting_entry_ids or []})
        self.conflicting_entry_ids = conflicting_entry_ids or []


class InfrastructureError(WeekplanError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass


class StorageError(InfrastructureError):
    """Atomic storage operation failed and was rolled back."""

    pass
