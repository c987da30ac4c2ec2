"""Account notifications: log-only sender for confirmation and activation mails."""

from __future__ import annotations

import logging

from app.application.dtos.account import AccountResult
from app.domain.enums import NotificationKind
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_SUBJECTS: dict[NotificationKind, str] = {
    NotificationKind.NEEDS_CONFIRMATION: "Confirm your account",
    NotificationKind.ACCOUNT_ACTIVE: "Your account is now active",
}


class LogOnlyAccountNotifier:
    """INotificationService implementation that logs instead of sending email.

    Use when no mail transport is configured. Production can swap in an SMTP
    or queue-based implementation behind the same port.
    """

    def __init__(self) -> None:
        self.sent: int = 0

    async def notify(
        self,
        account: AccountResult,
        kind: NotificationKind,
        *,
        confirmation_code: str | None = None,
    ) -> None:
        """Log the notification; no actual email sent."""
        if kind == NotificationKind.NEEDS_CONFIRMATION and not confirmation_code:
            raise ValueError("needs_confirmation notification requires a confirmation code")
        self.sent += 1
        logger.info(
            "Account notify: would send %r to account %s",
            _SUBJECTS[kind],
            account.id,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Account notify recipient: %s (kind=%s, at %s)",
                account.email,
                kind.value,
                utc_now().isoformat(),
            )
