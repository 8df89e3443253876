"""Tests for domain exceptions (error_code, message, details)."""

from bookapi.application.dtos.violation import Violation
from bookapi.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BookApiException,
    DeserializationException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    StoreException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base BookApiException uses class name as error_code when not provided."""
    exc = BookApiException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "BookApiException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "BookApiException", "message": "Something failed"}


def test_base_exception_custom_error_code_and_details() -> None:
    exc = BookApiException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception_carries_violations() -> None:
    violations = [Violation("last_name", "Field required"), Violation("first_name", "Too long")]
    exc = ValidationException(violations)
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.violations == violations
    assert exc.details["violations"][0] == {"property_path": "last_name", "message": "Field required"}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Invalid token"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception() -> None:
    exc = AuthorizationException(role="ROLE_ADMIN", message="No rights")
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "No rights"
    assert exc.details == {"role": "ROLE_ADMIN"}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("author", 42)
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "author", "resource_id": "42"}


def test_deserialization_exception() -> None:
    exc = DeserializationException("AuthorPayload", [{"type": "json_invalid"}])
    assert exc.error_code == "DESERIALIZATION_ERROR"
    assert exc.details["errors"] == [{"type": "json_invalid"}]


def test_store_exception() -> None:
    exc = StoreException("flush", "connection lost")
    assert exc.error_code == "STORE_ERROR"
    assert exc.details == {"operation": "flush", "reason": "connection lost"}


def test_sql_not_configured_exception() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
