"""FastAPI routes for owner-scoped cards."""
from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from cardstack.cards.models import Card, CardCreate, CardUpdate
from cardstack.cards.service import (
    CardNotFound,
    CardService,
    CardStorageError,
    CardValidationError,
    get_card_service,
)
from cardstack.common.error_envelope import error_response, internal_error, not_found_error
from cardstack.common.identity import RequestContext, get_request_context

router = APIRouter(prefix="/cards", tags=["cards"])


def _validation_error(exc: CardValidationError):
    details = {"errors": exc.errors} if exc.errors else None
    error_response(exc.code, exc.message, status_code=400, resource_kind="card", details=details)


@router.get("", response_model=List[Card])
def list_cards(
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        return service.list_cards(context)
    except CardStorageError:
        internal_error("card")


@router.patch("/reorder")
def reorder_cards(
    payload: Any = Body(default=None),
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        card_orders = payload.get("cardOrders") if isinstance(payload, dict) else None
        service.reorder_cards(context, card_orders)
        return {"message": "Cards reordered successfully"}
    except CardValidationError as exc:
        _validation_error(exc)
    except CardStorageError:
        internal_error("card")


@router.get("/{card_id}", response_model=Card)
def get_card(
    card_id: str,
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        return service.get_card(context, card_id)
    except CardNotFound as exc:
        not_found_error("card", str(exc))
    except CardStorageError:
        internal_error("card")


@router.post("", response_model=Card, status_code=201)
def create_card(
    req: CardCreate,
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        return service.create_card(context, req)
    except CardValidationError as exc:
        _validation_error(exc)
    except CardStorageError:
        internal_error("card")


@router.put("/{card_id}", response_model=Card)
def update_card(
    card_id: str,
    req: CardUpdate,
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        return service.update_card(context, card_id, req)
    except CardNotFound as exc:
        not_found_error("card", str(exc))
    except CardValidationError as exc:
        _validation_error(exc)
    except CardStorageError:
        internal_error("card")


@router.delete("/{card_id}")
def delete_card(
    card_id: str,
    context: RequestContext = Depends(get_request_context),
    service: CardService = Depends(get_card_service),
):
    try:
        service.delete_card(context, card_id)
        return {"message": "Card deleted successfully"}
    except CardNotFound as exc:
        not_found_error("card", str(exc))
    except CardStorageError:
        internal_error("card")
