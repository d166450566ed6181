"""Create the record_partitions blob table

Revision ID: 202410170001
Revises:
Create Date: 2024-10-17 00:01:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "202410170001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "record_partitions",
        sa.Column("key", sa.String(length=128), primary_key=True),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("record_partitions")
