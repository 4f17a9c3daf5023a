"""
Exception hierarchy for the estate portal.

Provides layered exception structure for domain-specific errors.
Every exception carries a plain-language message that is safe to show to
end users; protocol-level detail goes into ``details`` for the logs only.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class EstatePortalException(Exception):
    """Base exception for all estate portal errors."""

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


class ValidationError(EstatePortalException):
    """Raised when form or file validation fails."""

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


class AuthenticationError(EstatePortalException):
    """Raised when the identity provider rejects a request or a token is invalid."""


class AuthorizationError(EstatePortalException):
    """Raised when the signed-in user's tier does not allow an action."""

    def __init__(self, message: str, required_tier: str | None = None) -> None:
        details = {"required_tier": required_tier} if required_tier else None
        super().__init__(message, details)


class DataApiError(EstatePortalException):
    """Raised when a GraphQL operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize data API error.

        Args:
            message: Plain-language error message
            operation: GraphQL operation name that failed
            details: Raw errors and status codes (logs only)
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DataApiTransportError(DataApiError):
    """Raised when the data API could not be reached (retryable)."""


class UploadError(EstatePortalException):
    """Raised when an image upload to the object store fails."""

    def __init__(self, message: str, file_name: str | None = None) -> None:
        details = {"file_name": file_name} if file_name else None
        super().__init__(message, details)


class TriggerError(EstatePortalException):
    """Raised when the mutation that starts a tracked job fails; no tracker exists."""


class TrackerNotFoundError(EstatePortalException):
    """Raised when a tracker id is unknown or was already cancelled."""

    def __init__(self, tracker_id: str) -> None:
        super().__init__(f"Tracker not found: {tracker_id}", {"tracker_id": tracker_id})


class TrackerStateError(EstatePortalException):
    """Raised when a tracker operation is invalid for its current state."""


class PropertyNotFoundError(EstatePortalException):
    """Raised when a property id does not resolve to a listing."""

    def __init__(self, property_id: str) -> None:
        super().__init__("Property not found", {"property_id": property_id})
