"""
Cash Card Service — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to validate request bodies, serialize
       responses, and generate the OpenAPI document.

Two shapes for one card:
    CashCardRequest: what a client sends (amount only; id and owner are
                     never taken from the body)
    CashCard:        a stored card; every field is set

Keeping them apart means nothing downstream has to check for a missing id.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from cashcard.exceptions import ValidationError


# ══════════════════════════════════════════════════════════════════════════
# Card Models
# ══════════════════════════════════════════════════════════════════════════

# Ids are signed 64-bit (BIGINT); amounts must fit NUMERIC(12, 2)
CARD_ID_MIN = -(2**63)
CARD_ID_MAX = 2**63 - 1
MAX_AMOUNT = 9_999_999_999.99


class CashCardRequest(BaseModel):
    """
    Body of POST /cashcards and PUT /cashcards/{id}.

    Unknown keys (including "id" and "owner") are ignored: the id comes from
    the database and the owner from the authenticated caller.
    """
    amount: float = Field(
        allow_inf_nan=False,
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="New card balance",
    )


class CashCard(BaseModel):
    """
    Immutable value for one stored card.

    Serialized as {"id": ..., "amount": ..., "owner": ...} in that order.
    Equality is structural: two CashCards are equal when all three fields are.
    """
    id: int = Field(description="Identifier assigned by the store")
    amount: float = Field(description="Card balance")
    owner: str = Field(description="Username of the owner")

    model_config = {"from_attributes": True, "frozen": True}


# ══════════════════════════════════════════════════════════════════════════
# Paging & Sorting
# ══════════════════════════════════════════════════════════════════════════

SORTABLE_PROPERTIES = ("id", "amount", "owner")
SORT_DIRECTIONS = ("asc", "desc")
MAX_PAGE_INDEX = 2**31 - 1


class SortOrder(BaseModel):
    """One `ORDER BY` term: a card property and a direction."""
    field: Literal["id", "amount", "owner"]
    direction: Literal["asc", "desc"] = "asc"

    model_config = {"frozen": True}


DEFAULT_SORT = (SortOrder(field="amount", direction="asc"),)


def parse_sort(params: Optional[List[str]]) -> List[SortOrder]:
    """
    Turn repeated `sort` query parameters into sort orders.

    Each parameter has the form ``prop[,prop...][,asc|desc]``; the trailing
    direction applies to every property in that parameter and defaults to
    ascending. Empty input yields the default ``amount,asc``.

    Examples:
        ["amount,desc"]          → [amount desc]
        ["owner", "amount,DESC"] → [owner asc, amount desc]
        ["amount,id,desc"]       → [amount desc, id desc]

    Raises:
        ValidationError: unknown property (this also covers a bad direction
            such as "amount,sideways", which reads as a property name)
    """
    orders: List[SortOrder] = []
    for raw in params or []:
        tokens = [token.strip() for token in raw.split(",") if token.strip()]
        if not tokens:
            continue

        direction = "asc"
        if len(tokens) > 1 and tokens[-1].lower() in SORT_DIRECTIONS:
            direction = tokens.pop().lower()

        for prop in tokens:
            if prop not in SORTABLE_PROPERTIES:
                raise ValidationError(
                    message=f"Cannot sort by '{prop}'. Sortable properties: {', '.join(SORTABLE_PROPERTIES)}",
                    field="sort",
                )
            orders.append(SortOrder(field=prop, direction=direction))

    return orders or list(DEFAULT_SORT)


class PageRequest(BaseModel):
    """
    Validated pagination request: zero-based page index, page size, sort.

    The offset of the first row is page * size.
    """
    page: int = Field(default=0, ge=0, le=MAX_PAGE_INDEX)
    size: int = Field(default=20, ge=1)
    sort: List[SortOrder] = Field(default_factory=lambda: list(DEFAULT_SORT))

    model_config = {"frozen": True}

    @property
    def offset(self) -> int:
        return self.page * self.size


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Body returned for server-side (5xx) failures.

    Client errors (400/401/403/404) have no body at all.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
