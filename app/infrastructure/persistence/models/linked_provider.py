"""Linked identity provider ORM model (external OAuth-style logins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    BigId,
    BigIdMixin,
    TimestampMixin,
)

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.account import Account


class LinkedProvider(BigIdMixin, TimestampMixin, Base):
    """Linked provider. Table: linked_providers. Unique (provider, provider_id)."""

    __tablename__ = "linked_providers"

    account_id: Mapped[int] = mapped_column(
        BigId,
        ForeignKey("flower_rates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    provider_id: Mapped[str] = mapped_column(String(191), nullable=False)
    token: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[str | None] = mapped_column(String, nullable=True)

    account: Mapped[Account] = relationship(back_populates="providers")

    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_linked_provider"),
    )
