"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.account_notification_service import (
    LogOnlyAccountNotifier,
)
from app.infrastructure.services.account_subscribers import (
    AccountAuditLogger,
    AccountCacheInvalidator,
    PasswordHistoryRecorder,
    register_account_subscribers,
    register_cache_invalidation,
)

__all__ = [
    "AccountAuditLogger",
    "AccountCacheInvalidator",
    "LogOnlyAccountNotifier",
    "PasswordHistoryRecorder",
    "register_account_subscribers",
    "register_cache_invalidation",
]
