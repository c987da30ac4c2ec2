"""Account ORM model (table flower_rates) and its role/permission link tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    String,
    Table,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    BigId,
    BigIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.linked_provider import LinkedProvider
    from app.infrastructure.persistence.models.permission import Permission
    from app.infrastructure.persistence.models.role import Role


flower_rate_roles = Table(
    "flower_rate_roles",
    Base.metadata,
    Column(
        "flower_rate_id",
        BigId,
        ForeignKey("flower_rates.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        String,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

flower_rate_permissions = Table(
    "flower_rate_permissions",
    Base.metadata,
    Column(
        "flower_rate_id",
        BigId,
        ForeignKey("flower_rates.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Account(BigIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Account ("FlowerRate"). Table: flower_rates.

    Email is unique among live rows (partial unique index on deleted_at IS NULL).
    Row 1 is the primordial administrator.
    """

    __tablename__ = "flower_rates"

    first_name: Mapped[str] = mapped_column(String(191), nullable=False)
    last_name: Mapped[str] = mapped_column(String(191), nullable=False)
    email: Mapped[str] = mapped_column(String(191), nullable=False)
    password: Mapped[str] = mapped_column(String, nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    confirmed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    confirmation_code: Mapped[str | None] = mapped_column(String(64), nullable=True)

    roles: Mapped[list[Role]] = relationship(
        secondary=flower_rate_roles, lazy="selectin", order_by="Role.name"
    )
    permissions: Mapped[list[Permission]] = relationship(
        secondary=flower_rate_permissions, lazy="selectin", order_by="Permission.name"
    )
    providers: Mapped[list[LinkedProvider]] = relationship(
        back_populates="account", lazy="selectin", passive_deletes=True
    )

    __table_args__ = (
        Index(
            "uq_flower_rates_email_live",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
