"""Application services: account lifecycle."""

from app.application.services.account_lifecycle_service import AccountLifecycleService

__all__ = ["AccountLifecycleService"]
