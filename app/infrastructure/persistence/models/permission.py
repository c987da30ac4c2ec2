"""Permission ORM model (direct grants on accounts, independent of roles)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Permission(CuidMixin, TimestampMixin, Base):
    """Permission. Table: permissions. Unique name (e.g. "view backend")."""

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
