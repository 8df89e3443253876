"""Domain exceptions for the book API.

Defines the error taxonomy of the service. These exceptions are independent
of HTTP; the presentation layer maps them to responses in
bookapi.core.exception_handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bookapi.application.dtos.violation import Violation


class BookApiException(Exception):
    """Base exception for all book API errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body (error, message and details when present)."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(BookApiException):
    """Raised when an entity fails validation. Carries the constraint violations."""

    def __init__(self, violations: list[Violation]) -> None:
        """Initialize with the list of violations (never empty).

        Args:
            violations: Violations reported by the validator.
        """
        self.violations = list(violations)
        super().__init__(
            f"Validation failed with {len(self.violations)} violation(s)",
            "VALIDATION_ERROR",
            {"violations": [v.to_dict() for v in self.violations]},
        )


class AuthenticationException(BookApiException):
    """Raised when the bearer token is missing, malformed, expired or undecodable."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(BookApiException):
    """Raised when the current principal lacks the role an operation requires."""

    def __init__(
        self,
        role: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with the missing role and a human-readable message.

        Args:
            role: Role that was required (e.g. 'ROLE_ADMIN').
            message: Message returned to the client.
        """
        details = {"role": role} if role else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(BookApiException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'author', 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class DeserializationException(BookApiException):
    """Raised when a request body cannot be decoded into the target type."""

    def __init__(self, target: str, errors: list[Any] | None = None) -> None:
        """Initialize with the target type name and decoder errors.

        Args:
            target: Name of the type the body was decoded into.
            errors: Optional decoder error details.
        """
        super().__init__(
            f"Malformed request body for {target}",
            "DESERIALIZATION_ERROR",
            {"target": target, "errors": errors or []},
        )


class StoreException(BookApiException):
    """Raised when the persistent store rejects a write (constraint, connectivity)."""

    def __init__(self, operation: str, reason: str) -> None:
        """Initialize with the failed operation and the driver's reason.

        Args:
            operation: Store operation that failed (e.g. 'flush').
            reason: Underlying error message.
        """
        super().__init__(
            f"Store operation failed: {operation}",
            "STORE_ERROR",
            {"operation": operation, "reason": reason},
        )


class SqlNotConfiguredException(BookApiException):
    """Raised when a request needs the database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
