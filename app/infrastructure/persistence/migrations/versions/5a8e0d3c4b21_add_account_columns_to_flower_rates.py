"""add_account_columns_to_flower_rates

Revision ID: 5a8e0d3c4b21
Revises: 3f1c9a2b7d10
Create Date: 2026-03-02 11:02:47.120551

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5a8e0d3c4b21"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - names, credentials, status flags, soft delete."""
    op.add_column("flower_rates", sa.Column("first_name", sa.String(191), nullable=False))
    op.add_column("flower_rates", sa.Column("last_name", sa.String(191), nullable=False))
    op.add_column("flower_rates", sa.Column("email", sa.String(191), nullable=False))
    op.add_column("flower_rates", sa.Column("password", sa.String(), nullable=False))
    op.add_column(
        "flower_rates",
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.add_column(
        "flower_rates",
        sa.Column("confirmed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.add_column(
        "flower_rates", sa.Column("confirmation_code", sa.String(64), nullable=True)
    )
    op.add_column(
        "flower_rates",
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_flower_rates_deleted_at", "flower_rates", ["deleted_at"])
    # Email is unique among live accounts only.
    op.create_index(
        "uq_flower_rates_email_live",
        "flower_rates",
        ["email"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_flower_rates_email_live", table_name="flower_rates")
    op.drop_index("ix_flower_rates_deleted_at", table_name="flower_rates")
    for column in (
        "deleted_at",
        "confirmation_code",
        "confirmed",
        "active",
        "password",
        "email",
        "last_name",
        "first_name",
    ):
        op.drop_column("flower_rates", column)
