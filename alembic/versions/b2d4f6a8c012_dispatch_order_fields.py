"""dispatch order fields

Revision ID: b2d4f6a8c012
Revises: a1c3e5f7b901
Create Date: 2026-09-03 11:15:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "b2d4f6a8c012"
down_revision = "a1c3e5f7b901"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("dispatches") as batch_op:
        batch_op.add_column(sa.Column("numero_orden", sa.String(length=50), nullable=True))
        batch_op.add_column(sa.Column("ticket_orden", sa.String(length=50), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("dispatches") as batch_op:
        batch_op.drop_column("ticket_orden")
        batch_op.drop_column("numero_orden")
