"""Initial schema: properties.

Revision ID: 001_properties
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_properties"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "properties",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("rental_cost", sa.JSON, nullable=True),
        sa.Column("property_name", sa.Text, nullable=True),
        sa.Column("tag", sa.String(200), nullable=True),
        sa.Column("contract_start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("contract_end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("direct_cost", sa.JSON, nullable=True),
        sa.Column("group", sa.String(100), nullable=False),
        sa.Column("city", sa.String(200), nullable=True),
        sa.Column("fixed_cost", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_properties_group", "properties", ["group"])


def downgrade() -> None:
    op.drop_index("ix_properties_group", table_name="properties")
    op.drop_table("properties")
