"""Messaging: in-process lifecycle event bus."""

from app.infrastructure.messaging.event_bus import InProcessEventBus

__all__ = ["InProcessEventBus"]
