"""Role repository. Read methods return RoleResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(id=r.id, name=r.name)


class RoleRepository(BaseRepository[Role]):
    """Role lookups by name, plus create for seeding."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def get_by_names(self, names: list[str]) -> list[RoleResult]:
        """Return roles whose name is in names; unknown names are omitted."""
        if not names:
            return []
        result = await self.db.execute(
            select(Role).where(Role.name.in_(names)).order_by(Role.name)
        )
        return [_role_to_result(r) for r in result.scalars().all()]

    async def get_by_name(self, name: str) -> RoleResult | None:
        """Return the role called name, or None."""
        found = await self.get_by_names([name])
        return found[0] if found else None

    async def create_role(self, name: str, description: str | None = None) -> RoleResult:
        """Create a role; return read-model DTO."""
        created = await self.create(Role(name=name, description=description))
        return _role_to_result(created)
