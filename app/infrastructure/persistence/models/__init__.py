"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.account import (
    Account,
    flower_rate_permissions,
    flower_rate_roles,
)
from app.infrastructure.persistence.models.linked_provider import LinkedProvider
from app.infrastructure.persistence.models.mixins import (
    BigIdMixin,
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.password_history import PasswordHistory
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.models.role import Role

__all__ = [
    "Account",
    "BigIdMixin",
    "CuidMixin",
    "LinkedProvider",
    "PasswordHistory",
    "Permission",
    "Role",
    "SoftDeleteMixin",
    "TimestampMixin",
    "flower_rate_permissions",
    "flower_rate_roles",
]
