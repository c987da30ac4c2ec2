"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol

from app.domain.enums import AccountListView

if TYPE_CHECKING:
    from app.application.dtos.account import AccountPage, AccountResult
    from app.application.dtos.permission import PermissionResult
    from app.application.dtos.role import RoleResult


# Account repository interface
class IAccountRepository(Protocol):
    """Protocol for account persistence (DIP).

    Mutating methods flush but never commit; the caller owns the unit of work
    through transaction().
    """

    def transaction(self, error_key: str) -> AbstractAsyncContextManager[None]:
        """Commit on success, roll back on error. Storage failures become PersistenceException(error_key)."""

    async def get_by_id(
        self, account_id: int, *, with_trashed: bool = True
    ) -> AccountResult | None:
        """Return account by id. Soft-deleted rows are included unless with_trashed is False."""

    async def get_confirmation_code(self, account_id: int) -> str | None:
        """Return the stored confirmation code for the account."""

    async def get_password_hash(self, account_id: int) -> str | None:
        """Return the stored password hash for the account (None if missing)."""

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        """True if a non-deleted account other than exclude_id uses email."""

    async def create_account(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        active: bool,
        confirmed: bool,
        confirmation_code: str,
        role_ids: list[str],
        permission_ids: list[str],
    ) -> AccountResult:
        """Insert an account with its role and permission sets."""

    async def update_account(
        self,
        account_id: int,
        *,
        first_name: str,
        last_name: str,
        email: str,
        role_ids: list[str],
        permission_ids: list[str],
    ) -> AccountResult:
        """Update profile fields and replace role and permission sets."""

    async def set_password(self, account_id: int, password_hash: str) -> AccountResult:
        """Store a new password hash."""

    async def set_active(self, account_id: int, active: bool) -> AccountResult:
        """Set the active flag."""

    async def set_confirmed(self, account_id: int, confirmed: bool) -> AccountResult:
        """Set the confirmed flag."""

    async def soft_delete(self, account_id: int) -> AccountResult:
        """Set deleted_at to now."""

    async def restore(self, account_id: int) -> AccountResult:
        """Clear deleted_at."""

    async def force_delete(self, account_id: int) -> None:
        """Remove the account row and its password history, linked providers and pivots."""

    async def paginate(
        self,
        view: AccountListView,
        *,
        page: int,
        per_page: int,
        order_by: str,
        sort: str,
    ) -> AccountPage:
        """Return one page of accounts for the view, ordered by order_by/sort."""


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role lookups (DIP)."""

    async def get_by_names(self, names: list[str]) -> list[RoleResult]:
        """Return roles whose name is in names (unknown names are omitted)."""


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for permission lookups (DIP)."""

    async def get_by_names(self, names: list[str]) -> list[PermissionResult]:
        """Return permissions whose name is in names (unknown names are omitted)."""
