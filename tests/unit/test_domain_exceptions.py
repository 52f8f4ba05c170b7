"""Tests for domain exceptions (error_code, message, details)."""

import pytest

from app.core.exception_handlers import status_for_error_code
from app.domain.enums import TokenErrorKind
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
from app.infrastructure.exceptions import PersistenceException


def test_base_exception_default_error_code() -> None:
    """Base ExamCalendarException uses class name as error_code when not provided."""
    exc = ExamCalendarException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ExamCalendarException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    """to_dict exposes error, message and details."""
    exc = ExamCalendarException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid sort", field="sort_by")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "sort_by"}
    assert ValidationException("Invalid").details == {}


def test_authentication_exception() -> None:
    """AuthenticationException sets AUTHENTICATION_ERROR and default message."""
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_with_operation_and_role() -> None:
    """AuthorizationException names the denied operation and the caller's role."""
    exc = AuthorizationException(operation="delete", role="authenticated")
    assert exc.error_code == "PERMISSION_DENIED"
    assert "delete" in exc.message
    assert exc.details == {"operation": "delete", "role": "authenticated"}


def test_resource_not_found_exception() -> None:
    """ResourceNotFoundException carries resource_type and string resource_id."""
    exc = ResourceNotFoundException("exam", 42)
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "exam", "resource_id": "42"}


@pytest.mark.parametrize("kind", list(TokenErrorKind))
def test_token_verification_exception_codes(kind: TokenErrorKind) -> None:
    """Each token failure kind has a stable TOKEN_* code."""
    exc = TokenVerificationException(kind)
    assert exc.kind is kind
    assert exc.error_code == f"TOKEN_{kind.name}"
    assert exc.details == {"kind": kind.value}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ValidationException("bad"), 400),
        (ResourceNotFoundException("exam", 1), 404),
        (SearchExecutionException("substring", "boom"), 503),
        (PersistenceException("find_page", "OperationalError"), 503),
        (DatabaseNotConfiguredException(), 503),
    ],
)
def test_error_code_status_mapping(exc: ExamCalendarException, status: int) -> None:
    """Every domain error code maps to its HTTP status."""
    assert status_for_error_code(exc.error_code) == status
