"""product itbis rate

Revision ID: e5a7c9d1f345
Revises: d4f6b8c0e234
Create Date: 2026-09-10 14:20:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "e5a7c9d1f345"
down_revision = "d4f6b8c0e234"
branch_labels = None
depends_on = None

# Processed materials carry 18% ITBIS; natural aggregates are exempt.
PROCESSED_PRODUCTS = ("Arena lavada", "Gravillín", "Base")


def upgrade() -> None:
    with op.batch_alter_table("products") as batch_op:
        batch_op.add_column(
            sa.Column(
                "itbis_rate", sa.Numeric(4, 2), nullable=False, server_default=sa.text("0.00")
            )
        )

    products = sa.table(
        "products", sa.column("name", sa.String()), sa.column("itbis_rate", sa.Numeric(4, 2))
    )
    op.execute(
        products.update()
        .where(products.c.name.in_(PROCESSED_PRODUCTS))
        .values(itbis_rate=0.18)
    )


def downgrade() -> None:
    with op.batch_alter_table("products") as batch_op:
        batch_op.drop_column("itbis_rate")
