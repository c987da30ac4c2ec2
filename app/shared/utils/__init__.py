"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_confirmation_code, generate_cuid

__all__ = [
    "generate_confirmation_code",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
