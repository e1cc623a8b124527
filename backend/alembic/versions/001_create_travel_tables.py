"""Create flights and catalog tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `flights` plus the read-only `packages`, `destinations`, `hotels`.
How:   Generic UUID / JSON / timezone-aware timestamp types; see
       flybook/models/ for column documentation.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATALOG_TABLES = ("packages", "destinations", "hotels")


def upgrade() -> None:
    op.create_table(
        "flights",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Storage-assigned identifier"),
        sa.Column("from", sa.String(255), nullable=False, comment="Origin label (free text)"),
        sa.Column("to", sa.String(255), nullable=False, comment="Destination label (free text)"),
        sa.Column("stops", sa.String(50), nullable=False, comment="Number of stops as a categorical label"),
        sa.Column("class", sa.String(50), nullable=False, comment="Cabin category: economy, business, first, ..."),
        sa.Column("price", sa.Float(), nullable=False, comment="Non-negative fare amount"),
        sa.Column(
            "status",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'Active'"),
            comment="Lifecycle label, 'Active' unless the creator says otherwise",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When this flight was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_flights_price", "flights", ["price"])

    for table in CATALOG_TABLES:
        op.create_table(
            table,
            sa.Column("id", sa.Uuid(), nullable=False, comment="Storage-assigned identifier"),
            sa.Column("data", sa.JSON(), nullable=False, comment="Document body, returned verbatim with id merged in"),
            sa.Column(
                "created_at",
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.text("CURRENT_TIMESTAMP"),
            ),
            sa.PrimaryKeyConstraint("id"),
        )


def downgrade() -> None:
    for table in reversed(CATALOG_TABLES):
        op.drop_table(table)
    op.drop_index("idx_flights_price", table_name="flights")
    op.drop_table("flights")
