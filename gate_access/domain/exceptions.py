"""
Exception hierarchy for the gate access pipeline.

Only malformed input and persistence failures are raised to callers; business
outcomes (unknown face, cooldown, missing pass) are returned as Decisions.
All errors inherit from GateAccessError and carry a user-facing message.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class GateAccessError(Exception):
    """Base exception for all gate access errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Input validation
# -----------------------------------------------------------------------------


class InvalidDescriptorError(GateAccessError):
    """Raised when a query descriptor is malformed (wrong length, empty, non-finite)."""

    def __init__(self, message: str, expected_dimension: Optional[int] = None, actual_dimension: Optional[int] = None):
        super().__init__(
            message,
            user_message="Face could not be read. Please look at the camera and try again.",
            details={
                "expected_dimension": expected_dimension,
                "actual_dimension": actual_dimension,
            },
        )
        self.expected_dimension = expected_dimension
        self.actual_dimension = actual_dimension


# -----------------------------------------------------------------------------
# Directory
# -----------------------------------------------------------------------------


class DirectoryUnavailableError(GateAccessError):
    """Raised when no directory snapshot can be loaded."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Recognition directory unavailable. Please contact security.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------


class PersistenceError(GateAccessError):
    """Raised when a store write or read fails; the scan's audit trail is lost."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        retryable: bool = False,
        **kwargs,
    ):
        kwargs.setdefault("user_message", "Gate log could not be saved. Please contact security.")
        super().__init__(message, **kwargs)
        self.operation = operation
        self.retryable = retryable


class DatabaseConnectionError(PersistenceError):
    """Raised when the database connection fails."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Database connection failed. Please try again.",
            retryable=True,
            **kwargs,
        )


class DatabaseTimeoutError(PersistenceError):
    """Raised when a database operation times out."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="Database operation timed out. Please try again.",
            retryable=True,
            **kwargs,
        )


class StaleRecordError(PersistenceError):
    """Raised when today's attendance record changed between read and write."""

    def __init__(self, person_id: str, day: str, expected_version: Optional[int]):
        super().__init__(
            f"Attendance record for {person_id} on {day} changed concurrently "
            f"(expected version {expected_version})",
            operation="commit_transition",
            retryable=False,
            details={"person_id": person_id, "date": day, "expected_version": expected_version},
        )
        self.person_id = person_id
        self.day = day
        self.expected_version = expected_version


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at API boundaries so internal details are never exposed.
    """
    if isinstance(exc, GateAccessError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."
