"""Password history ORM model: one row per credential an account has used."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import BigId, BigIdMixin


class PasswordHistory(BigIdMixin, Base):
    """Password history entry. Table: password_histories."""

    __tablename__ = "password_histories"

    account_id: Mapped[int] = mapped_column(
        BigId,
        ForeignKey("flower_rates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
