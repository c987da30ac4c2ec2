"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAccountRepository,
    IPermissionRepository,
    IRoleRepository,
)
from app.application.interfaces.services import (
    ICacheService,
    IEventBus,
    INotificationService,
    IPasswordHasher,
)

__all__ = [
    "IAccountRepository",
    "ICacheService",
    "IEventBus",
    "INotificationService",
    "IPasswordHasher",
    "IPermissionRepository",
    "IRoleRepository",
]
