"""Permission repository. Read methods return PermissionResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.permission import PermissionResult
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    return PermissionResult(id=p.id, name=p.name)


class PermissionRepository(BaseRepository[Permission]):
    """Permission lookups by name, plus create for seeding."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def get_by_names(self, names: list[str]) -> list[PermissionResult]:
        """Return permissions whose name is in names; unknown names are omitted."""
        if not names:
            return []
        result = await self.db.execute(
            select(Permission).where(Permission.name.in_(names)).order_by(Permission.name)
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_by_name(self, name: str) -> PermissionResult | None:
        found = await self.get_by_names([name])
        return found[0] if found else None

    async def create_permission(
        self, name: str, description: str | None = None
    ) -> PermissionResult:
        """Create a permission; return read-model DTO."""
        created = await self.create(Permission(name=name, description=description))
        return _permission_to_result(created)
