"""Domain exceptions for the exam calendar application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any

from app.domain.enums import TokenErrorKind


class ExamCalendarException(Exception):
    """Base exception for all exam calendar application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
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
        """Serialize for JSON error responses (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ExamCalendarException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class TokenVerificationException(ExamCalendarException):
    """Raised by token verification; kind says which check failed.

    Always recovered locally (request continues unauthenticated), so it
    never reaches the exception handlers.
    """

    def __init__(self, kind: TokenErrorKind, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(
            message or f"Token rejected: {kind.value}",
            f"TOKEN_{kind.name}",
            {"kind": kind.value},
        )


class AuthenticationException(ExamCalendarException):
    """Raised when authentication fails (e.g. missing or invalid token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ExamCalendarException):
    """Raised when the caller's role lacks permission for the operation."""

    def __init__(
        self,
        operation: str | None = None,
        role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional operation, role, and message.

        Args:
            operation: Operation that was attempted (e.g. 'delete').
            role: Role the caller was resolved to (e.g. 'authenticated').
            message: Human-readable message; default used when operation omitted.
        """
        if operation and role:
            message = f"Permission denied: {operation} as {role}"
        details: dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if role:
            details["role"] = role
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(ExamCalendarException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'exam').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class SearchExecutionException(ExamCalendarException):
    """Raised when a search strategy fails to execute.

    The primary (full-text) failure is recovered by the fallback strategy;
    only a failure of the fallback reaches the caller.
    """

    def __init__(self, strategy: str, reason: str) -> None:
        super().__init__(
            f"Search failed ({strategy})",
            "SEARCH_UNAVAILABLE",
            {"strategy": strategy, "reason": reason},
        )


class DatabaseNotConfiguredException(ExamCalendarException):
    """Raised when an operation needs the database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
