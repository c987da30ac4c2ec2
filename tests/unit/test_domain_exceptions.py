"""Tests for domain exceptions (error_code, message, message_key, details) and their HTTP status."""

import pytest

from app.core.exception_handlers import status_for
from app.domain.exceptions import (
    AlreadyConfirmedException,
    AuthenticationException,
    AuthorizationException,
    DuplicateEmailException,
    FlowerRateException,
    NotConfirmedException,
    PersistenceException,
    PreconditionException,
    ProtectedAccountException,
    ResourceNotFoundException,
    SelfActionException,
    ValidationException,
)
from app.domain.messages import message_key, translate

PREFIX = "exceptions.backend.access.flower_rates"


def test_flowerrate_exception_default_error_code() -> None:
    """Base FlowerRateException uses class name as error_code when not provided."""
    exc = FlowerRateException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "FlowerRateException"
    assert exc.details == {}
    assert exc.message_key is None


def test_from_key_fills_message_and_key() -> None:
    exc = FlowerRateException.from_key("not_found")
    assert exc.message == "That user does not exist."
    assert exc.message_key == f"{PREFIX}.not_found"


def test_translate_unknown_key_falls_back_to_full_key() -> None:
    assert translate("no_such_key") == message_key("no_such_key")


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_duplicate_email_is_a_validation_error() -> None:
    exc = DuplicateEmailException()
    assert isinstance(exc, ValidationException)
    assert exc.message == "That email address belongs to a different user."
    assert exc.message_key == f"{PREFIX}.email_error"
    assert exc.details == {"field": "email"}


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_self_and_protected_are_authorization_errors() -> None:
    self_exc = SelfActionException("cant_deactivate_self", 4)
    protected = ProtectedAccountException("cant_unconfirm_admin", 1)

    assert isinstance(self_exc, AuthorizationException)
    assert self_exc.error_code == "SELF_ACTION_FORBIDDEN"
    assert self_exc.details == {"account_id": 4}
    assert self_exc.message == "You can not do that to yourself."
    assert isinstance(protected, AuthorizationException)
    assert protected.message_key == f"{PREFIX}.cant_unconfirm_admin"


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("account", 42)
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "account", "resource_id": "42"}
    assert exc.message_key == f"{PREFIX}.not_found"


def test_confirmation_preconditions() -> None:
    assert isinstance(AlreadyConfirmedException(3), PreconditionException)
    assert AlreadyConfirmedException(3).error_code == "ALREADY_CONFIRMED"
    assert NotConfirmedException(3).message == "This user is not confirmed."


def test_persistence_exception_hides_driver_error() -> None:
    exc = PersistenceException("mark_error")
    assert exc.error_code == "PERSISTENCE_ERROR"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "PERSISTENCE_ERROR",
        "message": "There was a problem updating this user. Please try again.",
        "message_key": f"{PREFIX}.mark_error",
        "details": {},
    }


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad"), 400),
        (DuplicateEmailException(), 400),
        (AuthenticationException(), 401),
        (SelfActionException("cant_unconfirm_self", 2), 403),
        (ProtectedAccountException("cant_unconfirm_admin", 1), 403),
        (ResourceNotFoundException("account", 9), 404),
        (PreconditionException("delete_first", 2), 409),
        (AlreadyConfirmedException(2), 409),
        (PersistenceException("create_error"), 500),
        (FlowerRateException("unmapped"), 400),
    ],
)
def test_status_for(exc: FlowerRateException, status: int) -> None:
    assert status_for(exc) == status
