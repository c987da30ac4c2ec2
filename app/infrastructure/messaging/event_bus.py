"""In-process event bus for account lifecycle events.

Subscribers register per event type (a base class subscribes to every
subclass). publish() delivers in registration order and awaits each
handler; a failing handler is logged and the remaining handlers still run.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from app.application.events import AccountEvent
from app.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=AccountEvent)
EventHandler = Callable[[AccountEvent], Awaitable[None]]


class InProcessEventBus:
    """IEventBus implementation that dispatches to awaitable handlers in the current task."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[type[AccountEvent], EventHandler]] = []

    def subscribe(
        self, event_type: type[E], handler: Callable[[E], Awaitable[None]]
    ) -> None:
        """Register handler for event_type and its subclasses."""
        self._subscriptions.append((event_type, handler))  # type: ignore[arg-type]
        logger.debug(
            "Subscribed %s to %s",
            getattr(handler, "__qualname__", repr(handler)),
            event_type.__name__,
        )

    def handlers_for(self, event: AccountEvent) -> list[EventHandler]:
        return [h for event_type, h in self._subscriptions if isinstance(event, event_type)]

    async def publish(self, event: AccountEvent) -> None:
        """Deliver event to every matching handler; handler failures are logged, never raised."""
        handlers = self.handlers_for(event)
        add_span_event(event.name, account_id=event.account_id, handlers=len(handlers))
        for handler in handlers:
            try:
                await handler(event)
            except Exception:
                logger.warning(
                    "Subscriber %s failed for %s (account %s)",
                    getattr(handler, "__qualname__", repr(handler)),
                    event.name,
                    event.account_id,
                    exc_info=True,
                )
