"""Column mixins shared by the account tables.

Accounts, providers and password history use integer ids; roles and
permissions use CUIDs. All timestamps are timezone-aware and set by the
database.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.shared.utils.generators import generate_cuid

# BIGINT in PostgreSQL; plain INTEGER on SQLite so rowid autoincrement applies.
BigId = BigInteger().with_variant(Integer(), "sqlite")

Timestamp = DateTime(timezone=True)


class BigIdMixin:
    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(BigId, primary_key=True, autoincrement=True)


class CuidMixin:
    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """created_at on insert; updated_at on insert and every update."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(Timestamp, nullable=False, server_default=func.now())

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            Timestamp, nullable=False, server_default=func.now(), onupdate=func.now()
        )


class SoftDeleteMixin:
    """deleted_at is NULL while the row is live; set when it is moved to the trash."""

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(Timestamp, nullable=True, index=True)
