"""Application DTOs (no ORM dependency)."""

from app.application.dtos.account import (
    AccountCreate,
    AccountPage,
    AccountResult,
    AccountUpdate,
)
from app.application.dtos.permission import PermissionResult
from app.application.dtos.role import RoleResult

__all__ = [
    "AccountCreate",
    "AccountPage",
    "AccountResult",
    "AccountUpdate",
    "PermissionResult",
    "RoleResult",
]
