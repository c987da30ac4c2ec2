"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.account_repo import AccountRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.password_history_repo import (
    PasswordHistoryRepository,
)
from app.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "PasswordHistoryRepository",
    "PermissionRepository",
    "RoleRepository",
]
