"""Account lifecycle events.

Published on the event bus after the owning transaction commits. Each event
carries an immutable snapshot of the account and the acting identity;
subscribers (audit log, password history, cache invalidation) must not
assume they run inside the service's transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from app.application.dtos.account import AccountResult
from app.shared.context import ActorContext
from app.shared.enums import AuditAction
from app.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class AccountEvent:
    """Base class for every account lifecycle event."""

    action: ClassVar[AuditAction]

    account: AccountResult
    actor: ActorContext
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def account_id(self) -> int:
        return self.account.id

    @property
    def name(self) -> str:
        return f"account.{self.action.value}"


@dataclass(frozen=True)
class AccountCreated(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.CREATED


@dataclass(frozen=True)
class AccountUpdated(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.UPDATED


@dataclass(frozen=True)
class PasswordChanged(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.PASSWORD_CHANGED


@dataclass(frozen=True)
class AccountDeactivated(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.DEACTIVATED


@dataclass(frozen=True)
class AccountReactivated(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.ACTIVATED


@dataclass(frozen=True)
class AccountConfirmed(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.CONFIRMED


@dataclass(frozen=True)
class AccountUnconfirmed(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.UNCONFIRMED


@dataclass(frozen=True)
class AccountDeleted(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.DELETED


@dataclass(frozen=True)
class AccountRestored(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.RESTORED


@dataclass(frozen=True)
class AccountPermanentlyDeleted(AccountEvent):
    action: ClassVar[AuditAction] = AuditAction.PERMANENTLY_DELETED
