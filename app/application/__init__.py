"""Application layer: DTOs, lifecycle events, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, event bus, notifier).
"""

from app.application.interfaces import (
    IAccountRepository,
    ICacheService,
    IEventBus,
    INotificationService,
    IPasswordHasher,
    IPermissionRepository,
    IRoleRepository,
)
from app.application.services.account_lifecycle_service import AccountLifecycleService

__all__ = [
    "AccountLifecycleService",
    "IAccountRepository",
    "ICacheService",
    "IEventBus",
    "INotificationService",
    "IPasswordHasher",
    "IPermissionRepository",
    "IRoleRepository",
]
