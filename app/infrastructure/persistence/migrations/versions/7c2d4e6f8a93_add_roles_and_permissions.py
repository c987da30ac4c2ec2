"""add_roles_and_permissions

Revision ID: 7c2d4e6f8a93
Revises: 5a8e0d3c4b21
Create Date: 2026-03-03 09:41:05.882310

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c2d4e6f8a93"
down_revision: Union[str, Sequence[str], None] = "5a8e0d3c4b21"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema - roles, permissions and their account link tables."""
    op.create_table(
        "roles",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )
    op.create_table(
        "permissions",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_permissions_name"),
    )
    op.create_table(
        "flower_rate_roles",
        sa.Column("flower_rate_id", sa.BigInteger(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("flower_rate_id", "role_id"),
        sa.ForeignKeyConstraint(["flower_rate_id"], ["flower_rates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
    )
    op.create_table(
        "flower_rate_permissions",
        sa.Column("flower_rate_id", sa.BigInteger(), nullable=False),
        sa.Column("permission_id", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("flower_rate_id", "permission_id"),
        sa.ForeignKeyConstraint(["flower_rate_id"], ["flower_rates.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("flower_rate_permissions")
    op.drop_table("flower_rate_roles")
    op.drop_table("permissions")
    op.drop_table("roles")
