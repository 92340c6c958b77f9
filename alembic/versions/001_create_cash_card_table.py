"""Create cash_card table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `cash_card` table holding every user's cards.
How:   BIGINT identity key, exact NUMERIC(12, 2) amount, indexed owner.

Rollback: downgrade() drops the table (all cards are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cash_card",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column(
            "amount",
            sa.Numeric(12, 2),
            nullable=False,
            comment="Card balance in currency units",
        ),
        sa.Column(
            "owner",
            sa.String(256),
            nullable=False,
            comment="Username of the card's owner",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Every card query filters on owner
    op.create_index("idx_cash_card_owner", "cash_card", ["owner"])


def downgrade() -> None:
    op.drop_index("idx_cash_card_owner", table_name="cash_card")
    op.drop_table("cash_card")
