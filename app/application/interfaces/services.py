"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from app.domain.enums import NotificationKind

if TYPE_CHECKING:
    from app.application.dtos.account import AccountResult
    from app.application.events import AccountEvent


# Event bus interface
class IEventBus(Protocol):
    """Protocol for publishing lifecycle events to subscribers."""

    async def publish(self, event: AccountEvent) -> None:
        """Deliver event to every subscriber registered for its type. Must not raise for subscriber failures."""


# Notification service interface
class INotificationService(Protocol):
    """Protocol for sending account notifications (confirmation request, account active)."""

    async def notify(
        self,
        account: AccountResult,
        kind: NotificationKind,
        *,
        confirmation_code: str | None = None,
    ) -> None:
        """Send notification of kind to the account holder."""


# Password hashing interface
class IPasswordHasher(Protocol):
    """Protocol for one-way password hashing."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash for password."""

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """True if plain_password matches hashed_password."""


# Cache interface
class ICacheService(Protocol):
    """Protocol for the read-through cache (get/set/delete)."""

    async def get(self, key: str) -> Any | None:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value under key with optional ttl (seconds)."""

    async def delete(self, key: str) -> bool:
        """Remove key."""

    def is_available(self) -> bool:
        """True if the backing store is connected."""
