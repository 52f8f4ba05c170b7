"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import Operation, Role, SortDirection, TokenErrorKind
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DatabaseNotConfiguredException,
    ExamCalendarException,
    ResourceNotFoundException,
    SearchExecutionException,
    TokenVerificationException,
    ValidationException,
)

__all__ = [
    # Enums
    "Operation",
    "Role",
    "SortDirection",
    "TokenErrorKind",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "DatabaseNotConfiguredException",
    "ExamCalendarException",
    "ResourceNotFoundException",
    "SearchExecutionException",
    "TokenVerificationException",
    "ValidationException",
]
