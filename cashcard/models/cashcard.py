"""
Cash Card Service — CashCard SQLAlchemy Model
===============================================

What:  ORM model representing the `cash_card` table.
Who:   Used by CashCardService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: BIGINT identity assigned by the database on insert; never changes.
      SQLite only auto-increments INTEGER primary keys, hence the variant.
    - amount: NUMERIC(12, 2) so currency is stored exactly. asdecimal=False
      hands Python floats to the API layer, which serializes them as JSON numbers.
    - owner: username of the principal that created the card. Every query
      filters on it, so it is indexed.
"""

from sqlalchemy import BigInteger, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from cashcard.database import Base


class CashCardRecord(Base):
    """
    One persisted cash card row.

    Query Patterns:
        - Fetch one: WHERE id = :id AND owner = :owner
        - List page: WHERE owner = :owner ORDER BY <sort>, id LIMIT :size OFFSET :offset
        - Count:     SELECT count(id) WHERE owner = :owner
    """

    __tablename__ = "cash_card"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    amount: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        comment="Card balance in currency units",
    )

    owner: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        comment="Username of the card's owner",
    )

    __table_args__ = (
        Index("idx_cash_card_owner", "owner"),
    )

    def __repr__(self) -> str:
        return f"<CashCardRecord(id={self.id}, amount={self.amount}, owner='{self.owner}')>"
