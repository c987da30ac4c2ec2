"""Acting identity passed explicitly into lifecycle operations.

The HTTP layer resolves the actor from the bearer token and hands an
ActorContext to the service; nothing reads the actor from ambient state.

Usage:
    actor = ActorContext.for_account(5)
    await service.mark(account_id, False, actor)
"""

from dataclasses import dataclass

from app.shared.enums import ActorType


@dataclass(frozen=True)
class ActorContext:
    """Immutable snapshot of who is performing an operation."""

    actor_id: int | None
    actor_type: ActorType = ActorType.SYSTEM
    ip_address: str | None = None
    user_agent: str | None = None

    def __post_init__(self) -> None:
        if self.actor_type == ActorType.USER and self.actor_id is None:
            raise ValueError("actor_id is required when actor_type is USER")

    @classmethod
    def for_account(
        cls,
        account_id: int,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> "ActorContext":
        """Actor context for an authenticated account."""
        return cls(
            actor_id=account_id,
            actor_type=ActorType.USER,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    @classmethod
    def system(cls) -> "ActorContext":
        """Actor context for scripts and background jobs (no identity)."""
        return cls(actor_id=None, actor_type=ActorType.SYSTEM)

    def is_account(self, account_id: int) -> bool:
        """Return True if the actor is the given account."""
        return self.actor_id is not None and self.actor_id == account_id
