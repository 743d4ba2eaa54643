"""Owner-scoped card operations."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, TypeVar

from cardstack.cards.errors import CardNotFound, CardStorageError, CardsError, CardValidationError
from cardstack.cards.models import (
    Card,
    CardCreate,
    CardUpdate,
    is_valid_card_type,
    parse_card_orders,
    validate_card,
)
from cardstack.cards.repository import CardRepository, card_repo_from_env
from cardstack.common.identity import RequestContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

# "new value if truthy, else keep"
TRUTHY_FIELDS = ("title", "content", "type", "background_color", "text_color")
# "new value if present in the body, else keep"
PRESENCE_FIELDS = ("image_url", "button_text", "button_action", "order")

__all__ = [
    "CardService",
    "CardsError",
    "CardNotFound",
    "CardValidationError",
    "CardStorageError",
    "get_card_service",
    "set_card_service",
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CardService:
    def __init__(
        self,
        repository: Optional[CardRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.repo = repository or card_repo_from_env()
        self._clock = clock or _utc_now

    def _store(self, ctx: RequestContext, op: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except Exception as exc:
            logger.exception("%s failed for user %s (request %s)", op, ctx.user_id, ctx.request_id)
            raise CardStorageError(f"{op} failed") from exc

    def _require(self, ctx: RequestContext, card_id: str) -> Card:
        card = self._store(ctx, "find card", lambda: self.repo.find_one(card_id, ctx.user_id))
        if not card:
            raise CardNotFound("Card not found")
        return card

    def list_cards(self, ctx: RequestContext) -> List[Card]:
        return self._store(ctx, "list cards", lambda: self.repo.list_active(ctx.user_id))

    def get_card(self, ctx: RequestContext, card_id: str) -> Card:
        # soft-deleted cards stay visible to their owner here
        return self._require(ctx, card_id)

    def create_card(self, ctx: RequestContext, req: CardCreate) -> Card:
        if not req.title or not req.content or not req.type:
            raise CardValidationError("Title, content, and type are required")
        if not is_valid_card_type(req.type):
            raise CardValidationError("Invalid card type", code="cards.invalid_type")
        now = self._clock()
        data: dict[str, Any] = {
            "title": req.title,
            "content": req.content,
            "type": req.type,
            "image_url": req.image_url,
            "button_text": req.button_text,
            "button_action": req.button_action,
            "order": req.order or 0,
            "created_by": ctx.user_id,
            "created_at": now,
            "updated_at": now,
        }
        # null colours fall back to the schema defaults
        if req.background_color is not None:
            data["background_color"] = req.background_color
        if req.text_color is not None:
            data["text_color"] = req.text_color
        card = validate_card(data)
        created = self._store(ctx, "create card", lambda: self.repo.create(card))
        logger.info("card %s created by %s", created.id, ctx.user_id)
        return created

    def update_card(self, ctx: RequestContext, card_id: str, req: CardUpdate) -> Card:
        card = self._require(ctx, card_id)
        if req.type and not is_valid_card_type(req.type):
            raise CardValidationError("Invalid card type", code="cards.invalid_type")

        data = card.model_dump()
        for name in TRUTHY_FIELDS:
            value = getattr(req, name)
            if value:
                data[name] = value
        for name in PRESENCE_FIELDS:
            if name in req.model_fields_set:
                data[name] = getattr(req, name)
        data["id"] = card.id
        data["created_by"] = card.created_by
        data["created_at"] = card.created_at
        data["updated_at"] = self._clock()

        updated = validate_card(data)
        saved = self._store(ctx, "update card", lambda: self.repo.save(updated))
        logger.info("card %s updated by %s", card_id, ctx.user_id)
        return saved

    def delete_card(self, ctx: RequestContext, card_id: str) -> Card:
        card = self._require(ctx, card_id)
        card.is_active = False
        card.updated_at = self._clock()
        self._store(ctx, "delete card", lambda: self.repo.mark_inactive(card.id, card.updated_at))
        logger.info("card %s soft-deleted by %s", card_id, ctx.user_id)
        return card

    def reorder_cards(self, ctx: RequestContext, card_orders: Any) -> int:
        """Apply each (id, order) pair the caller owns; others are skipped silently."""
        orders = parse_card_orders(card_orders)
        stamp = self._clock()
        matched = self._store(
            ctx, "reorder cards", lambda: self.repo.bulk_update_order(ctx.user_id, orders, stamp)
        )
        if matched != len(orders):
            logger.info("reorder for %s applied %s of %s entries", ctx.user_id, matched, len(orders))
        return matched


_default_service: Optional[CardService] = None


def get_card_service() -> CardService:
    global _default_service
    if _default_service is None:
        _default_service = CardService()
    return _default_service


def set_card_service(service: Optional[CardService]) -> None:
    global _default_service
    _default_service = service
