"""client prices

Revision ID: 07c9e1f3b567
Revises: f6b8d0e2a456
Create Date: 2026-09-15 17:45:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "07c9e1f3b567"
down_revision = "f6b8d0e2a456"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "client_prices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "product_id",
            sa.Integer(),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("client_name", sa.String(length=200), nullable=False),
        sa.Column("special_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "product_id", "client_name", name="uq_client_prices_product_client"
        ),
    )
    op.create_index(
        "ix_client_prices_lookup", "client_prices", ["client_name", "product_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_client_prices_lookup", table_name="client_prices")
    op.drop_table("client_prices")
