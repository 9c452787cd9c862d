"""clients

Revision ID: d4f6b8c0e234
Revises: c3e5a7b9d123
Create Date: 2026-09-08 10:05:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "d4f6b8c0e234"
down_revision = "c3e5a7b9d123"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "company_id",
            sa.Integer(),
            sa.ForeignKey("companies.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("rnc", sa.String(length=20), nullable=True),
        sa.Column("direccion", sa.Text(), nullable=True),
        sa.Column("obra", sa.Text(), nullable=True),
        sa.Column("numero_orden_compra", sa.String(length=50), nullable=True),
        sa.Column(
            "descuento", sa.Numeric(5, 2), nullable=False, server_default=sa.text("0.00")
        ),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_clients_name", "clients", ["name"])


def downgrade() -> None:
    op.drop_index("ix_clients_name", table_name="clients")
    op.drop_table("clients")
