"""Initial schema — customers table.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("document_num", sa.String(64), nullable=False),
        sa.Column("date_birthday", sa.Date, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
    )
    op.create_index(
        "ix_customers_document_num", "customers", ["document_num"], unique=True,
    )
    op.create_index("ix_customers_email", "customers", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_customers_email", table_name="customers")
    op.drop_index("ix_customers_document_num", table_name="customers")
    op.drop_table("customers")
