"""Domain layer: account enums, message catalog, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import (
    AccountListView,
    AccountSortField,
    NotificationKind,
    SortDirection,
)
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

__all__ = [
    "AccountListView",
    "AccountSortField",
    "NotificationKind",
    "SortDirection",
    "AlreadyConfirmedException",
    "AuthenticationException",
    "AuthorizationException",
    "DuplicateEmailException",
    "FlowerRateException",
    "NotConfirmedException",
    "PersistenceException",
    "PreconditionException",
    "ProtectedAccountException",
    "ResourceNotFoundException",
    "SelfActionException",
    "ValidationException",
]
