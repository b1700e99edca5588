"""
Exception hierarchy for the job tracking engine.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class JobTrackException(Exception):
    """Base exception for all job tracking errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(JobTrackException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidQuerySpec(JobTrackException, ValueError):
    """
    Raised when a projection request cannot be composed.

    Most commonly more than one collection path was requested: flattening two
    independent arrays into one row would produce a cross product. Callers
    must split such requests into separate projections.
    """

    def __init__(
        self,
        message: str,
        alias: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize rejected projection error.

        Args:
            message: Error message
            alias: Output alias that failed validation
            details: Additional context
        """
        details = details or {}
        if alias:
            details["alias"] = alias
        super().__init__(message, details)


class JobNotFoundError(JobTrackException):
    """Raised when no event exists for a logical job key."""

    def __init__(self, message_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize job not found error.

        Args:
            message_id: Logical job key that has no recorded events
            details: Additional context
        """
        details = details or {}
        details["message_id"] = message_id
        super().__init__(f"Job not found: {message_id}", details)


class ServiceLookupUnavailable(JobTrackException):
    """Raised when service entity resolution is requested without a lookup."""

    pass


class EventNotFoundError(JobTrackException):
    """Raised when no job event has the requested id."""

    def __init__(self, event_id: int, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["event_id"] = event_id
        super().__init__(f"Job event not found: {event_id}", details)


class DuplicateServiceError(JobTrackException):
    """Raised when registering a service name that is already taken."""

    def __init__(self, name: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["name"] = name
        super().__init__(f"Service already registered: {name}", details)
