"""Shared utilities: actor context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import ActorContext
from app.shared.enums import ActorType, AuditAction
from app.shared.utils import (
    ensure_utc,
    generate_confirmation_code,
    generate_cuid,
    utc_now,
)

__all__ = [
    "ActorContext",
    "ActorType",
    "AuditAction",
    "generate_confirmation_code",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
