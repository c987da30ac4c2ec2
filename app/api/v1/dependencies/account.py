"""Account lifecycle service and cache dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.services.account_lifecycle_service import AccountLifecycleService
from app.core.config import get_settings
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.persistence.repositories import (
    AccountRepository,
    PermissionRepository,
    RoleRepository,
)

from . import auth
from . import db as db_deps


async def get_account_service(
    request: Request,
    account_repo: Annotated[AccountRepository, Depends(db_deps.get_account_repo)],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    permission_repo: Annotated[
        PermissionRepository, Depends(db_deps.get_permission_repo)
    ],
    auth_security: Annotated[auth.AuthSecurity, Depends(auth.get_auth_security)],
) -> AccountLifecycleService:
    """AccountLifecycleService wired to the app's event bus and notifier."""
    return AccountLifecycleService(
        account_repo=account_repo,
        role_repo=role_repo,
        permission_repo=permission_repo,
        event_bus=request.app.state.event_bus,
        notifier=request.app.state.notifier,
        password_hasher=auth_security,
        default_per_page=get_settings().flower_rates_page_size,
    )


def get_cache(request: Request) -> CacheService | None:
    """Redis cache if connected at startup, else None."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None or not cache.is_available():
        return None
    return cache
