"""Shared repository plumbing: the unit-of-work boundary and flush-and-refresh writes."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import PersistenceException
from app.infrastructure.persistence.database import Base
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class BaseRepository[ModelType: Base]:
    """One session, one model. Writes flush; only transaction() commits."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @asynccontextmanager
    async def transaction(self, error_key: str) -> AsyncIterator[None]:
        """Run the enclosed block as one unit of work.

        Commits on success. Any exception rolls back every write made in the
        block; SQLAlchemy errors are re-raised as PersistenceException(error_key)
        with the driver error chained, anything else propagates unchanged.
        """
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("%s transaction failed (%s)", self.model.__name__, error_key)
            raise PersistenceException(error_key) from e
        except BaseException:
            await self.db.rollback()
            raise

    async def _flush_refreshed(self, obj: ModelType) -> ModelType:
        # Refresh picks up server-side defaults (ids, created_at, updated_at).
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def create(self, obj: ModelType) -> ModelType:
        """Add a new row and return it with generated values populated."""
        self.db.add(obj)
        return await self._flush_refreshed(obj)

    async def update(self, obj: ModelType) -> ModelType:
        """Write pending changes of an attached row and return it refreshed."""
        return await self._flush_refreshed(obj)
