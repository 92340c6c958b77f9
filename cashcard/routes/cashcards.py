"""
Cash Card Service — Cash Card Route Handlers
==============================================

What:  The /cashcards HTTP surface.
How:   Each handler authenticates via `require_card_owner`, delegates to
       CashCardService with the caller's username as owner, and maps the
       result to a status code.
Who:   Any HTTP client holding a CARD-OWNER account.

Endpoints:
    POST   /cashcards                   → 201 + Location
    GET    /cashcards?page&size&sort    → 200 JSON array (+ X-Total-Count)
    GET    /cashcards/{requested_id}    → 200 JSON card | 404
    PUT    /cashcards/{requested_id}    → 204 | 404
    DELETE /cashcards/{requested_id}    → 204 | 404
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cashcard.config import settings
from cashcard.database import get_db_session
from cashcard.dependencies import card_payload, require_card_owner
from cashcard.schemas.cashcard import (
    CARD_ID_MAX,
    CARD_ID_MIN,
    MAX_PAGE_INDEX,
    CashCard,
    CashCardRequest,
    ErrorResponse,
    PageRequest,
    parse_sort,
)
from cashcard.services.auth_service import Principal
from cashcard.services.cashcard_service import cashcard_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cashcards",
    tags=["Cash Cards"],
    responses={
        401: {"description": "Missing or invalid credentials"},
        403: {"description": "Authenticated user lacks the required role"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


def build_location(base_url: str, card_id: int) -> str:
    """Absolute URL of a card's read endpoint under `base_url`."""
    return f"{base_url.rstrip('/')}/cashcards/{card_id}"


# Body is parsed by card_payload after authorization; document it by hand
CARD_BODY_OPENAPI = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": CashCardRequest.model_json_schema()}},
    }
}


@router.post(
    "",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Card created; Location header points at it"},
        400: {"description": "Malformed body"},
    },
    summary="Create a cash card owned by the caller",
    openapi_extra=CARD_BODY_OPENAPI,
)
async def create_cash_card(
    request: Request,
    payload: CashCardRequest = Depends(card_payload),
    principal: Principal = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    card = await cashcard_service.create_cash_card(db=db, request=payload, owner=principal.username)
    base_url = settings.public_base_url or str(request.base_url)
    return Response(status_code=201, headers={"Location": build_location(base_url, card.id)})


@router.get(
    "",
    response_model=List[CashCard],
    responses={
        200: {"description": "One page of the caller's cards"},
        400: {"description": "Invalid page, size or sort"},
    },
    summary="List the caller's cash cards",
    description=(
        "Returns one page of the caller's cards. `sort` may be repeated and takes the form "
        "`property[,asc|desc]`; sortable properties are id, amount and owner. "
        "Defaults to `amount,asc`. The X-Total-Count header carries the caller's total card count."
    ),
)
async def find_all(
    response: Response,
    page: int = Query(default=0, ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index"),
    size: int = Query(
        default=settings.default_page_size, ge=1, le=settings.max_page_size,
        description="Cards per page",
    ),
    sort: Optional[List[str]] = Query(default=None, description="Sort order, e.g. amount,desc"),
    principal: Principal = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db_session),
) -> List[CashCard]:
    page_request = PageRequest(page=page, size=size, sort=parse_sort(sort))
    cards, total_count = await cashcard_service.list_cash_cards(
        db=db, owner=principal.username, page_request=page_request
    )
    response.headers["X-Total-Count"] = str(total_count)
    return cards


@router.get(
    "/{requested_id}",
    response_model=CashCard,
    responses={
        200: {"description": "The requested card"},
        404: {"description": "No such card for this caller"},
    },
    summary="Get one of the caller's cash cards",
)
async def find_by_id(
    requested_id: int = Path(ge=CARD_ID_MIN, le=CARD_ID_MAX, description="Card id"),
    principal: Principal = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db_session),
) -> CashCard:
    return await cashcard_service.find_cash_card(db=db, card_id=requested_id, owner=principal.username)


@router.put(
    "/{requested_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Amount replaced"},
        404: {"description": "No such card for this caller"},
    },
    summary="Replace the amount of one of the caller's cash cards",
    openapi_extra=CARD_BODY_OPENAPI,
)
async def put_cash_card(
    requested_id: int = Path(ge=CARD_ID_MIN, le=CARD_ID_MAX, description="Card id"),
    payload: CashCardRequest = Depends(card_payload),
    principal: Principal = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await cashcard_service.update_cash_card(
        db=db, card_id=requested_id, request=payload, owner=principal.username
    )
    return Response(status_code=204)


@router.delete(
    "/{requested_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Card deleted"},
        404: {"description": "No such card for this caller"},
    },
    summary="Delete one of the caller's cash cards",
)
async def delete_cash_card(
    requested_id: int = Path(ge=CARD_ID_MIN, le=CARD_ID_MAX, description="Card id"),
    principal: Principal = Depends(require_card_owner),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await cashcard_service.delete_cash_card(db=db, card_id=requested_id, owner=principal.username)
    return Response(status_code=204)
