"""create_location_table

Revision ID: b7d1e2f3a4c5
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "b7d1e2f3a4c5"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create location table with embedded before/after photo columns."""
    op.create_table(
        "location",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("qr_code_id", sa.String(length=255), nullable=False),
        sa.Column("location_name", sa.String(length=255), nullable=False),
        sa.Column("area", sa.String(length=255), nullable=False),
        sa.Column("supervisor_name", sa.String(length=255), nullable=False),
        sa.Column("contact_number", sa.String(length=10), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("before_photo_url", sa.String(length=1024), nullable=True),
        sa.Column("before_photo_uploaded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("after_photo_url", sa.String(length=1024), nullable=True),
        sa.Column("after_photo_uploaded_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # Not unique: QR-code uniqueness is a pre-insert check.
    op.create_index("ix_location_qr_code_id", "location", ["qr_code_id"])
    op.create_index("ix_location_created_at", "location", ["created_at"])


def downgrade() -> None:
    """Drop location table."""
    op.drop_index("ix_location_created_at", table_name="location")
    op.drop_index("ix_location_qr_code_id", table_name="location")
    op.drop_table("location", if_exists=True)
