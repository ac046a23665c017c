"""Create birds table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `birds` table, the single resource of the API.
How:   Portable column types (Integer identity, String, DateTime with timezone)
       so the same revision runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (all birds are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the birds table and its created_at index. See aviary/models/bird.py."""
    op.create_table(
        "birds",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(255),
            nullable=True,
            comment="Common name, e.g. 'Monk Parakeet'",
        ),
        sa.Column(
            "species",
            sa.String(255),
            nullable=True,
            comment="Scientific name, e.g. 'Myiopsitta monachus'",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this bird was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this bird was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_birds_created_at", "birds", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_birds_created_at", table_name="birds")
    op.drop_table("birds")
