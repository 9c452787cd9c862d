"""company billing fields

Revision ID: c3e5a7b9d123
Revises: b2d4f6a8c012
Create Date: 2026-09-05 16:40:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "c3e5a7b9d123"
down_revision = "b2d4f6a8c012"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("companies") as batch_op:
        batch_op.add_column(sa.Column("domicilio", sa.Text(), nullable=True))
        batch_op.add_column(
            sa.Column(
                "tipo_impositivo",
                sa.Numeric(5, 2),
                nullable=False,
                server_default=sa.text("0"),
            )
        )
        batch_op.add_column(
            sa.Column("exento", sa.Boolean(), nullable=False, server_default=sa.false())
        )
        batch_op.add_column(sa.Column("contactos", sa.Text(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("companies") as batch_op:
        batch_op.drop_column("contactos")
        batch_op.drop_column("exento")
        batch_op.drop_column("tipo_impositivo")
        batch_op.drop_column("domicilio")
