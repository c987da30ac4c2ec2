"""Shared enumerations for the FlowerRate application.

Cross-cutting enums used by application and infrastructure (e.g. audit,
actor type). Account-specific enums (e.g. AccountSortField) live in
app.domain.enums.
"""

from enum import Enum


class ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActorType(ValuesMixin, str, Enum):
    """Actor type for audit tracking (who performed the action)."""

    USER = "user"
    SYSTEM = "system"


class AuditAction(ValuesMixin, str, Enum):
    """Audit action types for account lifecycle tracking."""

    CREATED = "created"
    UPDATED = "updated"
    PASSWORD_CHANGED = "password_changed"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    DELETED = "deleted"
    RESTORED = "restored"
    PERMANENTLY_DELETED = "permanently_deleted"
