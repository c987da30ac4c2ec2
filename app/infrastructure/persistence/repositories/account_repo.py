"""Account repository. Interface methods return application DTOs (AccountResult, AccountPage)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.account import AccountPage, AccountResult
from app.domain.enums import AccountListView, AccountSortField, SortDirection
from app.domain.exceptions import (
    DuplicateEmailException,
    PersistenceException,
    ResourceNotFoundException,
)
from app.infrastructure.persistence.models.account import (
    Account,
    flower_rate_permissions,
    flower_rate_roles,
)
from app.infrastructure.persistence.models.linked_provider import LinkedProvider
from app.infrastructure.persistence.models.password_history import PasswordHistory
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc, utc_now


def _account_to_result(a: Account) -> AccountResult:
    """Map ORM Account to application AccountResult (no password, no confirmation code)."""
    return AccountResult(
        id=a.id,
        first_name=a.first_name,
        last_name=a.last_name,
        email=a.email,
        active=a.active,
        confirmed=a.confirmed,
        roles=tuple(r.name for r in a.roles),
        permissions=tuple(p.name for p in a.permissions),
        providers=tuple(p.provider for p in a.providers),
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
        deleted_at=ensure_utc(a.deleted_at),
    )


def _view_filter(view: AccountListView) -> list[Any]:
    if view == AccountListView.DELETED:
        return [Account.deleted_at.is_not(None)]
    return [
        Account.deleted_at.is_(None),
        Account.active == (view == AccountListView.ACTIVE),
    ]


class AccountRepository(BaseRepository[Account]):
    """Account repository (table flower_rates).

    Write methods flush and refresh so the returned DTO carries server-side
    timestamps; the caller commits through transaction().
    """

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Account)

    async def _get_entity(
        self, account_id: int, *, with_trashed: bool = True
    ) -> Account | None:
        stmt = select(Account).where(Account.id == account_id)
        if not with_trashed:
            stmt = stmt.where(Account.deleted_at.is_(None))
        # populate_existing: a row cached in the identity map may be stale after bulk writes.
        result = await self.db.execute(stmt.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def _require_entity(self, account_id: int) -> Account:
        account = await self._get_entity(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        return account

    async def _roles_by_ids(self, role_ids: list[str]) -> list[Role]:
        if not role_ids:
            return []
        result = await self.db.execute(select(Role).where(Role.id.in_(role_ids)))
        return list(result.scalars().all())

    async def _permissions_by_ids(self, permission_ids: list[str]) -> list[Permission]:
        if not permission_ids:
            return []
        result = await self.db.execute(
            select(Permission).where(Permission.id.in_(permission_ids))
        )
        return list(result.scalars().all())

    async def _save(self, account: Account) -> AccountResult:
        try:
            updated = await self.update(account)
        except IntegrityError as e:
            raise DuplicateEmailException() from e
        return _account_to_result(updated)

    async def get_by_id(
        self, account_id: int, *, with_trashed: bool = True
    ) -> AccountResult | None:
        account = await self._get_entity(account_id, with_trashed=with_trashed)
        return _account_to_result(account) if account else None

    async def get_by_email(self, email: str) -> AccountResult | None:
        """Live account using email (case-insensitive), or None."""
        result = await self.db.execute(
            select(Account).where(
                func.lower(Account.email) == email.lower(),
                Account.deleted_at.is_(None),
            )
        )
        account = result.scalars().first()
        return _account_to_result(account) if account else None

    async def get_confirmation_code(self, account_id: int) -> str | None:
        result = await self.db.execute(
            select(Account.confirmation_code).where(Account.id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_password_hash(self, account_id: int) -> str | None:
        result = await self.db.execute(
            select(Account.password).where(Account.id == account_id)
        )
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        """True if a live account other than exclude_id uses email (case-insensitive)."""
        stmt = select(Account.id).where(
            func.lower(Account.email) == email.lower(),
            Account.deleted_at.is_(None),
        )
        if exclude_id is not None:
            stmt = stmt.where(Account.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

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
        """Insert the account with exactly the given roles and permissions."""
        account = Account(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password_hash,
            active=active,
            confirmed=confirmed,
            confirmation_code=confirmation_code,
            roles=await self._roles_by_ids(role_ids),
            permissions=await self._permissions_by_ids(permission_ids),
            providers=[],
        )
        try:
            created = await self.create(account)
        except IntegrityError as e:
            raise DuplicateEmailException() from e
        return _account_to_result(created)

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
        """Update profile fields; replace role and permission sets (not merged)."""
        account = await self._require_entity(account_id)
        account.first_name = first_name
        account.last_name = last_name
        account.email = email
        account.roles = await self._roles_by_ids(role_ids)
        account.permissions = await self._permissions_by_ids(permission_ids)
        return await self._save(account)

    async def set_password(self, account_id: int, password_hash: str) -> AccountResult:
        account = await self._require_entity(account_id)
        account.password = password_hash
        return await self._save(account)

    async def set_active(self, account_id: int, active: bool) -> AccountResult:
        account = await self._require_entity(account_id)
        account.active = active
        return await self._save(account)

    async def set_confirmed(self, account_id: int, confirmed: bool) -> AccountResult:
        account = await self._require_entity(account_id)
        account.confirmed = confirmed
        return await self._save(account)

    async def soft_delete(self, account_id: int) -> AccountResult:
        account = await self._require_entity(account_id)
        account.deleted_at = utc_now()
        return await self._save(account)

    async def restore(self, account_id: int) -> AccountResult:
        account = await self._require_entity(account_id)
        account.deleted_at = None
        return await self._save(account)

    async def force_delete(self, account_id: int) -> None:
        """Delete password history, linked providers and links, then the account row.

        Raises PersistenceException("delete_error") when no account row was removed.
        """
        await self.db.execute(
            delete(PasswordHistory).where(PasswordHistory.account_id == account_id)
        )
        await self.db.execute(
            delete(LinkedProvider).where(LinkedProvider.account_id == account_id)
        )
        await self.db.execute(
            delete(flower_rate_roles).where(flower_rate_roles.c.flower_rate_id == account_id)
        )
        await self.db.execute(
            delete(flower_rate_permissions).where(
                flower_rate_permissions.c.flower_rate_id == account_id
            )
        )
        table = Account.__table__
        result = await self.db.execute(delete(table).where(table.c.id == account_id))
        if not result.rowcount:
            raise PersistenceException("delete_error")

    async def paginate(
        self,
        view: AccountListView,
        *,
        page: int,
        per_page: int,
        order_by: str = AccountSortField.CREATED_AT.value,
        sort: str = SortDirection.DESC.value,
    ) -> AccountPage:
        """Return one page of the view; roles, permissions and providers are eager-loaded."""
        filters = _view_filter(view)
        total = (
            await self.db.execute(
                select(func.count()).select_from(Account).where(*filters)
            )
        ).scalar_one()

        column = getattr(Account, AccountSortField(order_by).value)
        ordering = column.asc() if sort == SortDirection.ASC.value else column.desc()
        stmt = (
            select(Account)
            .where(*filters)
            .order_by(ordering, Account.id.asc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.db.execute(stmt)
        items = [_account_to_result(a) for a in result.scalars().all()]
        return AccountPage(items=items, total=total, page=page, per_page=per_page)
