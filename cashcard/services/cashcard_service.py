"""
Cash Card Service — Card Service (Business Logic)
===================================================

What:  Owner-scoped create / list / find / update / delete of cash cards.
How:   Every method takes the database session and the owner's username as
       explicit arguments, and every query filters on that owner.
Who:   Called by the /cashcards route handlers.

Tenant isolation:
    A card belonging to someone else is treated exactly like a card that
    does not exist: find, update and delete all raise NotFoundError, so a
    caller cannot learn whether another user's id is taken.

Design Decision:
    CashCardService is stateless; it receives the session for each call.
    One shared instance serves all requests.
"""

import logging
from typing import List, Tuple

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cashcard.exceptions import DatabaseError, NotFoundError
from cashcard.models.cashcard import CashCardRecord
from cashcard.schemas.cashcard import CashCard, CashCardRequest, PageRequest, SortOrder

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "id": CashCardRecord.id,
    "amount": CashCardRecord.amount,
    "owner": CashCardRecord.owner,
}


def order_by_clauses(sort: List[SortOrder]) -> list:
    """
    Translate sort orders into ORDER BY clauses.

    `id asc` is appended when id is not already a sort key so that rows with
    equal sort values always come back in the same order, which keeps page
    boundaries stable between calls.
    """
    clauses = []
    for order in sort:
        column = _SORT_COLUMNS[order.field]
        clauses.append(desc(column) if order.direction == "desc" else asc(column))
    if not any(order.field == "id" for order in sort):
        clauses.append(asc(CashCardRecord.id))
    return clauses


class CashCardService:
    """
    Business logic layer for cash card operations.

    Error Handling Strategy:
        Missing or foreign cards raise NotFoundError. SQLAlchemy errors are
        logged and wrapped in DatabaseError so no SQL reaches the client.
    """

    async def _find_owned(self, db: AsyncSession, card_id: int, owner: str) -> CashCardRecord:
        result = await db.execute(
            select(CashCardRecord).where(
                CashCardRecord.id == card_id,
                CashCardRecord.owner == owner,
            )
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(resource="cash card", resource_id=str(card_id))
        return record

    async def create_cash_card(
        self, db: AsyncSession, request: CashCardRequest, owner: str
    ) -> CashCard:
        """
        Insert a new card owned by `owner`.

        The id is assigned by the database during flush; the transaction is
        committed by get_db_session when the request completes.
        """
        try:
            record = CashCardRecord(amount=request.amount, owner=owner)
            db.add(record)
            await db.flush()
            logger.info("Cash card %s created for %s", record.id, owner)
            return CashCard.model_validate(record)
        except SQLAlchemyError as e:
            logger.error("Database error creating cash card for %s: %s", owner, str(e))
            raise DatabaseError(
                message="Could not create the cash card. Please try again.",
                context={"owner": owner, "error_type": type(e).__name__},
            )

    async def list_cash_cards(
        self, db: AsyncSession, owner: str, page_request: PageRequest
    ) -> Tuple[List[CashCard], int]:
        """
        Return one page of the owner's cards plus the owner's total card count.

        Query plan:
            SELECT * FROM cash_card WHERE owner = :owner
            ORDER BY <sort...>, id ASC LIMIT :size OFFSET :page * :size
            → Uses idx_cash_card_owner to narrow to the owner's rows

        A page past the end is an empty list, not an error.
        """
        try:
            query = (
                select(CashCardRecord)
                .where(CashCardRecord.owner == owner)
                .order_by(*order_by_clauses(page_request.sort))
                .offset(page_request.offset)
                .limit(page_request.size)
            )
            result = await db.execute(query)
            cards = [CashCard.model_validate(record) for record in result.scalars().all()]

            count_result = await db.execute(
                select(func.count(CashCardRecord.id)).where(CashCardRecord.owner == owner)
            )
            total_count = count_result.scalar() or 0

            return cards, total_count
        except SQLAlchemyError as e:
            logger.error("Database error listing cash cards for %s: %s", owner, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve cash cards. Please try again.",
                context={"owner": owner, "error_type": type(e).__name__},
            )

    async def find_cash_card(self, db: AsyncSession, card_id: int, owner: str) -> CashCard:
        """
        Fetch one card owned by `owner`.

        Raises:
            NotFoundError: no such id, or the id belongs to another owner
        """
        try:
            record = await self._find_owned(db, card_id, owner)
            return CashCard.model_validate(record)
        except SQLAlchemyError as e:
            logger.error("Database error fetching cash card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the cash card. Please try again.",
                context={"card_id": card_id},
            )

    async def update_cash_card(
        self, db: AsyncSession, card_id: int, request: CashCardRequest, owner: str
    ) -> CashCard:
        """
        Replace the amount of one of the owner's cards. id and owner never change.

        Raises:
            NotFoundError: no such id for this owner (nothing is created)
        """
        try:
            record = await self._find_owned(db, card_id, owner)
            record.amount = request.amount
            await db.flush()
            logger.info("Cash card %s updated by %s", card_id, owner)
            return CashCard.model_validate(record)
        except SQLAlchemyError as e:
            logger.error("Database error updating cash card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not update the cash card. Please try again.",
                context={"card_id": card_id},
            )

    async def delete_cash_card(self, db: AsyncSession, card_id: int, owner: str) -> None:
        """
        Delete one of the owner's cards.

        Raises:
            NotFoundError: no such id for this owner
        """
        try:
            record = await self._find_owned(db, card_id, owner)
            await db.delete(record)
            await db.flush()
            logger.info("Cash card %s deleted by %s", card_id, owner)
        except SQLAlchemyError as e:
            logger.error("Database error deleting cash card %s: %s", card_id, str(e))
            raise DatabaseError(
                message="Could not delete the cash card. Please try again.",
                context={"card_id": card_id},
            )


cashcard_service = CashCardService()
