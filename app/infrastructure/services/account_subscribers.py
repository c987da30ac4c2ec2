"""Lifecycle event subscribers: audit log, password history, cache invalidation.

Each subscriber runs after the service's transaction has committed. Anything
that writes opens its own session.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.events import (
    AccountCreated,
    AccountEvent,
    PasswordChanged,
)
from app.application.interfaces.services import ICacheService
from app.infrastructure.cache.keys import account_key
from app.infrastructure.messaging.event_bus import InProcessEventBus
from app.infrastructure.persistence.repositories.account_repo import AccountRepository
from app.infrastructure.persistence.repositories.password_history_repo import (
    PasswordHistoryRepository,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)
audit_logger = get_logger("app.audit")


class AccountAuditLogger:
    """Writes one structured audit log line per lifecycle event."""

    async def __call__(self, event: AccountEvent) -> None:
        audit_logger.info(
            "%s account=%s actor=%s actor_type=%s ip=%s at=%s",
            event.name,
            event.account_id,
            event.actor.actor_id,
            event.actor.actor_type.value,
            event.actor.ip_address,
            event.occurred_at.isoformat(),
        )


class PasswordHistoryRecorder:
    """Appends the account's current password hash to its history (create and password change)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def __call__(self, event: AccountEvent) -> None:
        async with self.session_factory() as session:
            accounts = AccountRepository(session)
            history = PasswordHistoryRepository(session)
            async with history.transaction("update_password_error"):
                password_hash = await accounts.get_password_hash(event.account_id)
                if password_hash is None:
                    logger.warning(
                        "Password history skipped: account %s no longer exists",
                        event.account_id,
                    )
                    return
                await history.add(event.account_id, password_hash)
        logger.debug("Password history recorded for account %s", event.account_id)


class AccountCacheInvalidator:
    """Drops the cached account representation on every lifecycle event."""

    def __init__(self, cache: ICacheService) -> None:
        self.cache = cache

    async def __call__(self, event: AccountEvent) -> None:
        if self.cache.is_available():
            await self.cache.delete(account_key(event.account_id))


def register_account_subscribers(
    bus: InProcessEventBus,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Wire the audit logger and password history recorder onto bus."""
    bus.subscribe(AccountEvent, AccountAuditLogger())
    recorder = PasswordHistoryRecorder(session_factory)
    bus.subscribe(AccountCreated, recorder)
    bus.subscribe(PasswordChanged, recorder)


def register_cache_invalidation(bus: InProcessEventBus, cache: ICacheService) -> None:
    """Wire cache invalidation onto bus (only when a cache is configured)."""
    bus.subscribe(AccountEvent, AccountCacheInvalidator(cache))
