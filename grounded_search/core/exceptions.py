"""
Exception hierarchy for the grounded search application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class GroundedSearchException(Exception):
    """Base exception for all grounded search application errors."""

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


class ValidationError(GroundedSearchException):
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


class StreamFailureError(GroundedSearchException):
    """Raised when the upstream answer stream fails terminally."""

    def __init__(
        self,
        message: str,
        request_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize stream failure error.

        Args:
            message: Error message
            request_id: Request whose stream failed
            details: Additional context
        """
        details = details or {}
        if request_id is not None:
            details["request_id"] = request_id
        super().__init__(message, details)


class RequestInProgressError(GroundedSearchException):
    """Raised when a request begins while another is still active."""

    def __init__(self, active_request_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize request in progress error.

        Args:
            active_request_id: ID of the request still consuming its stream
            details: Additional context
        """
        details = details or {}
        details["active_request_id"] = active_request_id
        super().__init__(f"Request {active_request_id} is still in progress", details)


class RequestNotFoundError(GroundedSearchException):
    """Raised when an archived request cannot be found."""

    def __init__(self, request_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize request not found error.

        Args:
            request_id: ID of the missing request
            details: Additional context
        """
        details = details or {}
        details["request_id"] = request_id
        super().__init__(f"Request not found: {request_id}", details)


class AssemblerClosedError(GroundedSearchException):
    """Raised when a finalized assembler receives more chunks."""

    pass
