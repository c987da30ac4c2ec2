"""add_password_histories_and_linked_providers

Revision ID: 9b4f1e2a6c58
Revises: 7c2d4e6f8a93
Create Date: 2026-03-04 14:27:39.004187

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "9b4f1e2a6c58"
down_revision: Union[str, Sequence[str], None] = "7c2d4e6f8a93"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - owned password history and linked provider records."""
    op.create_table(
        "password_histories",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column("password", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["account_id"], ["flower_rates.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_password_histories_account_id", "password_histories", ["account_id"]
    )
    op.create_table(
        "linked_providers",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_id", sa.String(191), nullable=False),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("avatar", sa.String(), nullable=True),
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
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["account_id"], ["flower_rates.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("provider", "provider_id", name="uq_linked_provider"),
    )
    op.create_index("ix_linked_providers_account_id", "linked_providers", ["account_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_linked_providers_account_id", table_name="linked_providers")
    op.drop_table("linked_providers")
    op.drop_index("ix_password_histories_account_id", table_name="password_histories")
    op.drop_table("password_histories")
