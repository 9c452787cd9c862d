"""config table

Revision ID: f6b8d0e2a456
Revises: e5a7c9d1f345
Create Date: 2026-09-12 09:30:00.000000
"""
from datetime import datetime

from alembic import op
import sqlalchemy as sa


revision = "f6b8d0e2a456"
down_revision = "e5a7c9d1f345"
branch_labels = None
depends_on = None


def upgrade() -> None:
    config = op.create_table(
        "config",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=100), nullable=False, unique=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    now = datetime.utcnow()
    op.bulk_insert(
        config,
        [
            {
                "key": "dispatch_start_number",
                "value": "1",
                "description": "Starting number for the dispatch sequence",
                "created_at": now,
                "updated_at": now,
            }
        ],
    )


def downgrade() -> None:
    op.drop_table("config")
