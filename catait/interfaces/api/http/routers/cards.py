"""
===============================================================================
CRC CARD: catait/interfaces/api/http/routers/cards.py
===============================================================================

Class/Module:
    Cards Router

Responsibilities:
    - Public lookup of an actionable card (GET /cards/{card_id}).
    - Catalog listing (GET /cards, ?admin=true for the full list).
    - Administration: create / update / delete / reorder (scope cards:admin).
    - Translate CardError -> RFC7807.

Collaborators:
    - catait.application.usecases.cards
    - catait.identity.auth (require_scope, check_scope)
    - catait.container (DI factories)
    - schemas.cards (pydantic DTOs)

Notes:
    - /cards/reorder is declared before /cards/{card_id} so it is not captured
      as an identifier.
===============================================================================
"""

from __future__ import annotations

from catait.application.usecases import (
    CreateCardUseCase,
    DeleteCardUseCase,
    GetCardUseCase,
    ListCardsUseCase,
    ReorderCardsUseCase,
    UpdateCardUseCase,
)
from catait.application.usecases.cards import CardError, CardErrorCode
from catait.container import (
    get_create_card_use_case,
    get_delete_card_use_case,
    get_get_card_use_case,
    get_list_cards_use_case,
    get_reorder_cards_use_case,
    get_update_card_use_case,
)
from catait.crosscutting.error_responses import (
    configuration_incomplete,
    internal_error,
    invalid_input,
    not_found,
)
from catait.identity.auth import SCOPE_CARDS_ADMIN, check_scope, require_scope
from fastapi import APIRouter, Depends, Header, Query, Request

from ..schemas.cards import (
    AdminCardEnvelopeRes,
    AdminCardRes,
    AdminCardsListRes,
    CardDetailRes,
    CardSummaryRes,
    CardsListRes,
    CardWriteReq,
    DeleteCardRes,
    GetCardRes,
    ReorderCardsReq,
    ReorderCardsRes,
)

router = APIRouter()


# =============================================================================
# Internal helpers
# =============================================================================


def _raise_card_error(error: CardError) -> None:
    if error.code == CardErrorCode.INVALID_INPUT:
        raise invalid_input(error.message, details=error.details)

    if error.code == CardErrorCode.NOT_FOUND:
        raise not_found(error.message)

    if error.code == CardErrorCode.CONFIGURATION_INCOMPLETE:
        raise configuration_incomplete(error.message, error.details or {})

    raise internal_error(error.message)


async def _require_admin_for_full_listing(
    request: Request,
    admin: bool = Query(False, description="Include disabled cards (cards:admin)"),
    api_key: str | None = Header(None, alias="X-API-Key"),
) -> bool:
    if admin:
        await check_scope(request, api_key, SCOPE_CARDS_ADMIN)
    return admin


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/cards",
    response_model=None,
    responses={200: {"model": CardsListRes}},
    tags=["cards"],
)
def list_cards(
    admin: bool = Depends(_require_admin_for_full_listing),
    use_case: ListCardsUseCase = Depends(get_list_cards_use_case),
):
    result = use_case.execute(include_disabled=admin)
    if result.error is not None:
        _raise_card_error(result.error)

    if admin:
        return AdminCardsListRes(data=[AdminCardRes.from_card(c) for c in result.cards])
    return CardsListRes(data=[CardSummaryRes.from_card(c) for c in result.cards])


@router.post(
    "/cards",
    response_model=AdminCardEnvelopeRes,
    status_code=201,
    tags=["cards"],
    dependencies=[Depends(require_scope(SCOPE_CARDS_ADMIN))],
)
def create_card(
    req: CardWriteReq,
    use_case: CreateCardUseCase = Depends(get_create_card_use_case),
):
    result = use_case.execute(req.to_draft())
    if result.error is not None:
        _raise_card_error(result.error)
    return AdminCardEnvelopeRes(data=AdminCardRes.from_card(result.card))


@router.put(
    "/cards/reorder",
    response_model=ReorderCardsRes,
    tags=["cards"],
    dependencies=[Depends(require_scope(SCOPE_CARDS_ADMIN))],
)
def reorder_cards(
    req: ReorderCardsReq,
    use_case: ReorderCardsUseCase = Depends(get_reorder_cards_use_case),
):
    result = use_case.execute(req.card_ids)
    if result.error is not None:
        _raise_card_error(result.error)
    return ReorderCardsRes(updated=result.updated)


@router.get(
    "/cards/{card_id}",
    response_model=GetCardRes,
    tags=["cards"],
)
def get_card(
    card_id: str,
    use_case: GetCardUseCase = Depends(get_get_card_use_case),
):
    result = use_case.execute(card_id)
    if result.error is not None:
        _raise_card_error(result.error)
    return GetCardRes(data=CardDetailRes.from_detail(result.card))


@router.put(
    "/cards/{card_id}",
    response_model=AdminCardEnvelopeRes,
    tags=["cards"],
    dependencies=[Depends(require_scope(SCOPE_CARDS_ADMIN))],
)
def update_card(
    card_id: str,
    req: CardWriteReq,
    use_case: UpdateCardUseCase = Depends(get_update_card_use_case),
):
    result = use_case.execute(card_id, req.to_draft())
    if result.error is not None:
        _raise_card_error(result.error)
    return AdminCardEnvelopeRes(data=AdminCardRes.from_card(result.card))


@router.delete(
    "/cards/{card_id}",
    response_model=DeleteCardRes,
    tags=["cards"],
    dependencies=[Depends(require_scope(SCOPE_CARDS_ADMIN))],
)
def delete_card(
    card_id: str,
    use_case: DeleteCardUseCase = Depends(get_delete_card_use_case),
):
    result = use_case.execute(card_id)
    if result.error is not None:
        _raise_card_error(result.error)
    return DeleteCardRes(id=result.deleted_id)
