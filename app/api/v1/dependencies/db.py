"""DB session and repository dependencies (composition root).

All repositories of a request share the session from get_db, so the
service's transaction() covers every write made during the request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import (
    AccountRepository,
    PermissionRepository,
    RoleRepository,
)


async def get_account_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountRepository:
    """Account repository bound to the request session."""
    return AccountRepository(db)


async def get_role_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleRepository:
    return RoleRepository(db)


async def get_permission_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionRepository:
    return PermissionRepository(db)
