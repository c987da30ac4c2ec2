"""Account rule violations.

Nothing here knows about HTTP; app.core.exception_handlers maps error_code
to a status. Every account rule violation carries a localizable message_key
(exceptions.backend.access.flower_rates.<key>) next to its English message,
so callers can catch FlowerRateException uniformly and translate it.
"""

from typing import Any

from app.domain.messages import message_key as _full_key
from app.domain.messages import translate


class FlowerRateException(Exception):
    """Root of every FlowerRate error.

    error_code is the machine-readable category (defaults to the class name),
    details holds context such as the offending field or account id, and
    message_key is None for errors outside the translation catalog.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        message_key: str | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.message_key = message_key
        super().__init__(self.message)

    @classmethod
    def from_key(cls, key: str, **kwargs: Any) -> "FlowerRateException":
        """Build the exception from a catalog key (message + message_key)."""
        return cls(translate(key), message_key=_full_key(key), **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "message_key": self.message_key,
            "details": self.details,
        }


class ValidationException(FlowerRateException):
    """Raised when input validation fails (missing role, unknown name, bad sort)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        message_key: str | None = None,
    ) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details, message_key)


class DuplicateEmailException(ValidationException):
    """Raised when an email is already used by a different live account."""

    def __init__(self) -> None:
        super().__init__(
            translate("email_error"),
            field="email",
            message_key=_full_key("email_error"),
        )


class AuthenticationException(FlowerRateException):
    """Raised when authentication fails (e.g. invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(FlowerRateException):
    """Raised when the actor may not perform the operation."""

    def __init__(
        self,
        message: str = "Permission denied",
        error_code: str = "PERMISSION_DENIED",
        details: dict[str, Any] | None = None,
        message_key: str | None = None,
    ) -> None:
        super().__init__(message, error_code, details, message_key)


class SelfActionException(AuthorizationException):
    """Raised when an actor tries to deactivate or un-confirm their own account."""

    def __init__(self, key: str, account_id: int) -> None:
        super().__init__(
            translate(key),
            "SELF_ACTION_FORBIDDEN",
            {"account_id": account_id},
            _full_key(key),
        )


class ProtectedAccountException(AuthorizationException):
    """Raised when an operation targets the primordial admin account."""

    def __init__(self, key: str, account_id: int) -> None:
        super().__init__(
            translate(key),
            "PROTECTED_ACCOUNT",
            {"account_id": account_id},
            _full_key(key),
        )


class ResourceNotFoundException(FlowerRateException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        key = "not_found" if resource_type == "account" else None
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
            _full_key(key) if key else None,
        )


class PreconditionException(FlowerRateException):
    """Raised when the account is not in the state an operation requires."""

    def __init__(
        self,
        key: str,
        account_id: int,
        error_code: str = "PRECONDITION_FAILED",
    ) -> None:
        super().__init__(
            translate(key),
            error_code,
            {"account_id": account_id},
            _full_key(key),
        )


class AlreadyConfirmedException(PreconditionException):
    """Raised when confirming (or re-sending confirmation to) a confirmed account."""

    def __init__(self, account_id: int) -> None:
        super().__init__("already_confirmed", account_id, "ALREADY_CONFIRMED")


class NotConfirmedException(PreconditionException):
    """Raised when un-confirming an account that is not confirmed."""

    def __init__(self, account_id: int) -> None:
        super().__init__("not_confirmed", account_id, "NOT_CONFIRMED")


class PersistenceException(FlowerRateException):
    """Raised when the store rejects a write (insert/update/delete failed).

    The key names the operation that failed (create_error, mark_error, ...);
    the underlying driver error is chained as __cause__ and not exposed.
    """

    def __init__(self, key: str) -> None:
        super().__init__(translate(key), "PERSISTENCE_ERROR", {}, _full_key(key))
