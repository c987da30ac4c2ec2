"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories, the acting
account and the account lifecycle service. Routes depend only on these,
not on infrastructure directly.
"""

from app.api.v1.dependencies.account import get_account_service, get_cache
from app.api.v1.dependencies.auth import (
    AuthSecurity,
    get_auth_security,
    get_current_actor,
)
from app.api.v1.dependencies.db import (
    get_account_repo,
    get_permission_repo,
    get_role_repo,
)

__all__ = [
    "AuthSecurity",
    "get_account_repo",
    "get_account_service",
    "get_auth_security",
    "get_cache",
    "get_current_actor",
    "get_permission_repo",
    "get_role_repo",
]
