"""add version column to bookings

Revision ID: 9a4f6c3e1d28
Revises: 5e8b2f4a9c17
Create Date: 2025-09-29 23:15:27

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "9a4f6c3e1d28"
down_revision: Union[str, None] = "5e8b2f4a9c17"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Optimistic concurrency for bookings.

    The ORM maps this column as version_id_col: every UPDATE is issued as
    ``... WHERE id = :id AND version = :read_version`` and bumps the counter,
    so two writers racing on the same booking cannot both succeed.
    """
    op.add_column(
        "bookings",
        sa.Column("version", sa.Integer(), server_default="1", nullable=False),
    )


def downgrade() -> None:
    op.drop_column("bookings", "version")
