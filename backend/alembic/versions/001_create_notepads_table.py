"""Create notepads table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notepads` table holding every note.
How:   Portable column types (UUID, TEXT, naive TIMESTAMP, BOOLEAN) so the same
       revision runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table (all notes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notepads",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        # Naive UTC; the application always writes UTC readings
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column(
            "archived",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # created_at: date filter and default list ordering
    op.create_index("idx_notepads_created_at", "notepads", ["created_at"])
    # archived: /active, /archived and the stats counts
    op.create_index("idx_notepads_archived", "notepads", ["archived"])


def downgrade() -> None:
    op.drop_index("idx_notepads_archived", table_name="notepads")
    op.drop_index("idx_notepads_created_at", table_name="notepads")
    op.drop_table("notepads")
