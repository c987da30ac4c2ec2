"""Password history repository: append-only record of used credentials."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.password_history import PasswordHistory
from app.infrastructure.persistence.repositories.base import BaseRepository


class PasswordHistoryRepository(BaseRepository[PasswordHistory]):
    """Append and read password history entries."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PasswordHistory)

    async def add(self, account_id: int, password_hash: str) -> PasswordHistory:
        """Record password_hash for account_id (flush only)."""
        return await self.create(
            PasswordHistory(account_id=account_id, password=password_hash)
        )

    async def list_for_account(self, account_id: int) -> list[str]:
        """Return stored hashes for the account, oldest first."""
        result = await self.db.execute(
            select(PasswordHistory.password)
            .where(PasswordHistory.account_id == account_id)
            .order_by(PasswordHistory.id)
        )
        return list(result.scalars().all())
