"""Account lifecycle: every state transition of a FlowerRate account.

Each mutation runs in one unit of work (repository.transaction). Lifecycle
events and notifications are collected while the transaction is open and
dispatched only after it commits; their failures are logged and never change
the result returned to the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

from app.application.dtos.account import (
    AccountCreate,
    AccountPage,
    AccountResult,
    AccountUpdate,
)
from app.application.events import (
    AccountConfirmed,
    AccountCreated,
    AccountDeactivated,
    AccountDeleted,
    AccountEvent,
    AccountPermanentlyDeleted,
    AccountReactivated,
    AccountRestored,
    AccountUnconfirmed,
    AccountUpdated,
    PasswordChanged,
)
from app.core.constants import (
    DEFAULT_ORDER_BY,
    DEFAULT_SORT,
    PRIMORDIAL_ACCOUNT_ID,
)
from app.domain.enums import (
    AccountListView,
    AccountSortField,
    NotificationKind,
    SortDirection,
)
from app.domain.exceptions import (
    AlreadyConfirmedException,
    DuplicateEmailException,
    NotConfirmedException,
    PreconditionException,
    ProtectedAccountException,
    ResourceNotFoundException,
    SelfActionException,
    ValidationException,
)
from app.domain.messages import message_key, translate
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.generators import generate_confirmation_code

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IAccountRepository,
        IPermissionRepository,
        IRoleRepository,
    )
    from app.application.interfaces.services import (
        IEventBus,
        INotificationService,
        IPasswordHasher,
    )
    from app.shared.context import ActorContext

logger = get_logger(__name__)


def _requires_approval_from_settings() -> bool:
    from app.core.config import get_settings

    return get_settings().flower_rates_requires_approval


class AccountLifecycleService:
    """Owns account state transitions and enforces their invariants."""

    def __init__(
        self,
        account_repo: IAccountRepository,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        event_bus: IEventBus,
        notifier: INotificationService,
        password_hasher: IPasswordHasher,
        requires_approval: Callable[[], bool] | None = None,
        default_per_page: int = 25,
    ) -> None:
        self.account_repo = account_repo
        self.role_repo = role_repo
        self.permission_repo = permission_repo
        self.event_bus = event_bus
        self.notifier = notifier
        self.password_hasher = password_hasher
        self._requires_approval = requires_approval or _requires_approval_from_settings
        self.default_per_page = default_per_page

    @property
    def requires_approval(self) -> bool:
        """System-wide "requires approval" policy, read at call time."""
        return bool(self._requires_approval())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced("account.get")
    async def get(self, account_id: int) -> AccountResult:
        """Return the account, soft-deleted or not. Raises ResourceNotFoundException."""
        return await self._load(account_id, with_trashed=True)

    @traced("account.list_active")
    async def list_active(
        self,
        page: int = 1,
        per_page: int | None = None,
        order_by: str = DEFAULT_ORDER_BY,
        sort: str = DEFAULT_SORT,
    ) -> AccountPage:
        """Live accounts with active == True."""
        return await self._list(AccountListView.ACTIVE, page, per_page, order_by, sort)

    @traced("account.list_inactive")
    async def list_inactive(
        self,
        page: int = 1,
        per_page: int | None = None,
        order_by: str = DEFAULT_ORDER_BY,
        sort: str = DEFAULT_SORT,
    ) -> AccountPage:
        """Live accounts with active == False."""
        return await self._list(AccountListView.INACTIVE, page, per_page, order_by, sort)

    @traced("account.list_deleted")
    async def list_deleted(
        self,
        page: int = 1,
        per_page: int | None = None,
        order_by: str = DEFAULT_ORDER_BY,
        sort: str = DEFAULT_SORT,
    ) -> AccountPage:
        """Soft-deleted accounts only."""
        return await self._list(AccountListView.DELETED, page, per_page, order_by, sort)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced("account.create")
    async def create(self, data: AccountCreate, actor: ActorContext) -> AccountResult:
        """Create an account with its roles and direct permissions.

        Sends the "needs confirmation" notification only when the account is
        not confirmed, a confirmation email was requested and the approval
        policy is off. Emits AccountCreated.
        """
        if not data.roles:
            raise ValidationException(
                translate("role_needed_create"),
                field="roles",
                message_key=message_key("role_needed_create"),
            )
        password_hash = await asyncio.to_thread(
            self.password_hasher.hash_password, data.password
        )
        confirmation_code = generate_confirmation_code()

        async with self.account_repo.transaction("create_error"):
            if await self.account_repo.email_taken(data.email):
                raise DuplicateEmailException()
            role_ids = await self._resolve_roles(data.roles)
            permission_ids = await self._resolve_permissions(data.permissions)
            account = await self.account_repo.create_account(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                password_hash=password_hash,
                active=data.active,
                confirmed=data.confirmed,
                confirmation_code=confirmation_code,
                role_ids=role_ids,
                permission_ids=permission_ids,
            )

        add_span_attributes(**{"account.id": account.id})
        logger.info("Account %s created by actor %s", account.id, actor.actor_id)
        if (
            not account.confirmed
            and data.send_confirmation_email
            and not self.requires_approval
        ):
            await self._notify(
                account,
                NotificationKind.NEEDS_CONFIRMATION,
                confirmation_code=confirmation_code,
            )
        await self._publish([AccountCreated(account=account, actor=actor)])
        return account

    @traced("account.update")
    async def update(
        self, account_id: int, data: AccountUpdate, actor: ActorContext
    ) -> AccountResult:
        """Update names and email; replace roles and permissions wholesale. Emits AccountUpdated."""
        async with self.account_repo.transaction("update_error"):
            await self._load(account_id, with_trashed=False)
            if await self.account_repo.email_taken(data.email, exclude_id=account_id):
                raise DuplicateEmailException()
            role_ids = await self._resolve_roles(data.roles)
            permission_ids = await self._resolve_permissions(data.permissions)
            account = await self.account_repo.update_account(
                account_id,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                role_ids=role_ids,
                permission_ids=permission_ids,
            )

        logger.info("Account %s updated by actor %s", account_id, actor.actor_id)
        await self._publish([AccountUpdated(account=account, actor=actor)])
        return account

    @traced("account.update_password")
    async def update_password(
        self, account_id: int, password: str, actor: ActorContext
    ) -> AccountResult:
        """Hash and store a new password. Emits PasswordChanged (history is written by a subscriber)."""
        password_hash = await asyncio.to_thread(
            self.password_hasher.hash_password, password
        )
        async with self.account_repo.transaction("update_password_error"):
            await self._load(account_id, with_trashed=False)
            account = await self.account_repo.set_password(account_id, password_hash)

        logger.info("Password of account %s changed by actor %s", account_id, actor.actor_id)
        await self._publish([PasswordChanged(account=account, actor=actor)])
        return account

    @traced("account.mark")
    async def mark(
        self, account_id: int, active: bool, actor: ActorContext
    ) -> AccountResult:
        """Set the active flag.

        An actor cannot deactivate itself. The flag is written on every call,
        so marking an already active account active emits AccountReactivated
        again.
        """
        if not active and actor.is_account(account_id):
            raise SelfActionException("cant_deactivate_self", account_id)

        async with self.account_repo.transaction("mark_error"):
            await self._load(account_id, with_trashed=False)
            account = await self.account_repo.set_active(account_id, active)

        logger.info(
            "Account %s marked %s by actor %s",
            account_id,
            "active" if active else "inactive",
            actor.actor_id,
        )
        event_type = AccountReactivated if active else AccountDeactivated
        await self._publish([event_type(account=account, actor=actor)])
        return account

    @traced("account.confirm")
    async def confirm(self, account_id: int, actor: ActorContext) -> AccountResult:
        """Confirm the account. Emits AccountConfirmed; notifies "account active" when approval is required."""
        async with self.account_repo.transaction("cant_confirm"):
            current = await self._load(account_id, with_trashed=False)
            if current.confirmed:
                raise AlreadyConfirmedException(account_id)
            account = await self.account_repo.set_confirmed(account_id, True)

        logger.info("Account %s confirmed by actor %s", account_id, actor.actor_id)
        if self.requires_approval:
            await self._notify(account, NotificationKind.ACCOUNT_ACTIVE)
        await self._publish([AccountConfirmed(account=account, actor=actor)])
        return account

    @traced("account.unconfirm")
    async def unconfirm(self, account_id: int, actor: ActorContext) -> AccountResult:
        """Un-confirm the account. Never allowed for the primordial admin or for the actor itself."""
        async with self.account_repo.transaction("cant_unconfirm"):
            current = await self._load(account_id, with_trashed=False)
            if not current.confirmed:
                raise NotConfirmedException(account_id)
            if account_id == PRIMORDIAL_ACCOUNT_ID:
                raise ProtectedAccountException("cant_unconfirm_admin", account_id)
            if actor.is_account(account_id):
                raise SelfActionException("cant_unconfirm_self", account_id)
            account = await self.account_repo.set_confirmed(account_id, False)

        logger.info("Account %s un-confirmed by actor %s", account_id, actor.actor_id)
        await self._publish([AccountUnconfirmed(account=account, actor=actor)])
        return account

    @traced("account.send_confirmation")
    async def send_confirmation(
        self, account_id: int, actor: ActorContext
    ) -> AccountResult:
        """Re-send the "needs confirmation" notification with the stored code."""
        account = await self._load(account_id, with_trashed=False)
        if account.confirmed:
            raise AlreadyConfirmedException(account_id)
        code = await self.account_repo.get_confirmation_code(account_id)
        logger.info(
            "Confirmation re-sent for account %s by actor %s", account_id, actor.actor_id
        )
        await self._notify(
            account, NotificationKind.NEEDS_CONFIRMATION, confirmation_code=code
        )
        return account

    @traced("account.delete")
    async def delete(self, account_id: int, actor: ActorContext) -> AccountResult:
        """Soft-delete the account. Emits AccountDeleted."""
        async with self.account_repo.transaction("delete_error"):
            current = await self._load(account_id, with_trashed=True)
            if current.is_deleted:
                raise PreconditionException("already_deleted", account_id)
            account = await self.account_repo.soft_delete(account_id)

        logger.info("Account %s deleted by actor %s", account_id, actor.actor_id)
        await self._publish([AccountDeleted(account=account, actor=actor)])
        return account

    @traced("account.restore")
    async def restore(self, account_id: int, actor: ActorContext) -> AccountResult:
        """Restore a soft-deleted account. Emits AccountRestored."""
        async with self.account_repo.transaction("restore_error"):
            current = await self._load(account_id, with_trashed=True)
            if not current.is_deleted:
                raise PreconditionException("cant_restore", account_id)
            account = await self.account_repo.restore(account_id)

        logger.info("Account %s restored by actor %s", account_id, actor.actor_id)
        await self._publish([AccountRestored(account=account, actor=actor)])
        return account

    @traced("account.force_delete")
    async def force_delete(self, account_id: int, actor: ActorContext) -> AccountResult:
        """Permanently remove a soft-deleted account with its password history and linked providers.

        Returns the last snapshot of the removed account. Emits AccountPermanentlyDeleted.
        An account that is already gone fails the same precondition as a live one.
        """
        async with self.account_repo.transaction("delete_error"):
            snapshot = await self.account_repo.get_by_id(account_id, with_trashed=True)
            if snapshot is None or not snapshot.is_deleted:
                raise PreconditionException("delete_first", account_id)
            await self.account_repo.force_delete(account_id)

        logger.info("Account %s permanently deleted by actor %s", account_id, actor.actor_id)
        await self._publish([AccountPermanentlyDeleted(account=snapshot, actor=actor)])
        return snapshot

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, account_id: int, *, with_trashed: bool) -> AccountResult:
        account = await self.account_repo.get_by_id(account_id, with_trashed=with_trashed)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        return account

    async def _list(
        self,
        view: AccountListView,
        page: int,
        per_page: int | None,
        order_by: str,
        sort: str,
    ) -> AccountPage:
        if order_by not in AccountSortField.values():
            raise ValidationException(f"Cannot order accounts by '{order_by}'", field="order_by")
        if sort not in SortDirection.values():
            raise ValidationException(f"Invalid sort direction '{sort}'", field="sort")
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        size = per_page or self.default_per_page
        if size < 1:
            raise ValidationException("per_page must be >= 1", field="per_page")
        return await self.account_repo.paginate(
            view, page=page, per_page=size, order_by=order_by, sort=sort
        )

    async def _resolve_roles(self, names: list[str]) -> list[str]:
        unique = list(dict.fromkeys(names))
        if not unique:
            return []
        found = await self.role_repo.get_by_names(unique)
        if len(found) != len(unique):
            raise ValidationException(
                translate("role_not_found"),
                field="roles",
                message_key=message_key("role_not_found"),
            )
        return [r.id for r in found]

    async def _resolve_permissions(self, names: list[str]) -> list[str]:
        unique = list(dict.fromkeys(names))
        if not unique:
            return []
        found = await self.permission_repo.get_by_names(unique)
        if len(found) != len(unique):
            raise ValidationException(
                translate("permission_not_found"),
                field="permissions",
                message_key=message_key("permission_not_found"),
            )
        return [p.id for p in found]

    async def _publish(self, events: list[AccountEvent]) -> None:
        for event in events:
            await self.event_bus.publish(event)

    async def _notify(
        self,
        account: AccountResult,
        kind: NotificationKind,
        *,
        confirmation_code: str | None = None,
    ) -> None:
        try:
            await self.notifier.notify(account, kind, confirmation_code=confirmation_code)
        except Exception:
            logger.warning(
                "Notification %s for account %s failed",
                kind.value,
                account.id,
                exc_info=True,
            )
