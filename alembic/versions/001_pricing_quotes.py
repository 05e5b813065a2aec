"""Saved pricing quotes table.

Revision ID: 001_pricing_quotes
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSON

# revision identifiers, used by Alembic.
revision: str = "001_pricing_quotes"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() is built in from PostgreSQL 13
    op.create_table(
        "pricing_quotes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("company_name", sa.String(300), nullable=False),
        sa.Column("industry", sa.String(100), nullable=True),
        sa.Column("employee_count", sa.String(20), nullable=True),
        sa.Column("recommended_tier", sa.String(20), nullable=False),
        sa.Column("monthly_total", sa.Integer(), nullable=False),
        sa.Column("setup_fee", sa.Integer(), nullable=False),
        sa.Column("annual_total", sa.Integer(), nullable=False),
        sa.Column("pricing_input", JSON(), nullable=False),
        sa.Column("pricing_output", JSON(), nullable=False),
        sa.Column("created_by", sa.String(320), nullable=True),
        sa.Column("lead_id", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_pricing_quotes_created_at", "pricing_quotes", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_pricing_quotes_created_at", table_name="pricing_quotes")
    op.drop_table("pricing_quotes")
