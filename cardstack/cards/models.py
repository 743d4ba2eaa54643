"""Card schema, request payloads and the pre-persistence validator."""
from __future__ import annotations

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from cardstack.cards.errors import CardValidationError

IMAGE_URL_PATTERN = re.compile(r"^https?://.+")

DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_TEXT_COLOR = "#000000"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CardType(str, Enum):
    text = "text"
    image = "image"
    mixed = "mixed"
    interactive = "interactive"
    large_featured = "large-featured"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


def is_valid_card_type(value: Any) -> bool:
    return isinstance(value, str) and value in CardType.values()


class Card(BaseModel):
    """Stored card document.

    JSON uses the camelCase aliases (``imageUrl``, ``createdBy``, ``_id``);
    the store keeps the snake_case field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    id: str = Field(default_factory=lambda: uuid4().hex, alias="_id")
    title: str = Field(..., min_length=1, max_length=100)
    content: str = Field(..., min_length=1, max_length=1000)
    type: CardType
    image_url: Optional[str] = None
    button_text: Optional[str] = Field(default=None, max_length=50)
    button_action: Optional[str] = Field(default=None, max_length=200)
    background_color: str = DEFAULT_BACKGROUND_COLOR
    text_color: str = DEFAULT_TEXT_COLOR
    order: int = 0
    is_active: bool = True
    created_by: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _trim(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, v: Optional[str]) -> Optional[str]:
        # empty or absent is always fine
        if v and not IMAGE_URL_PATTERN.match(v):
            raise ValueError("Invalid image URL")
        return v


def _describe(errors: List[Dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Card validation failed: " + "; ".join(parts)


def validate_card(data: Mapping[str, Any]) -> Card:
    """Validate a full card document without touching any store."""
    try:
        return Card.model_validate(dict(data))
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise CardValidationError(_describe(errors), errors=errors) from exc


class CardCreate(BaseModel):
    """POST /cards body. Everything optional so missing fields get a domain message."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[str] = None
    image_url: Optional[str] = None
    button_text: Optional[str] = None
    button_action: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    order: Optional[int] = None


class CardUpdate(CardCreate):
    """PUT /cards/{id} body; ``model_fields_set`` tells omitted from explicit null."""


class CardOrder(BaseModel):
    id: str
    order: int


def parse_card_orders(raw: Any) -> List[CardOrder]:
    if not isinstance(raw, list):
        raise CardValidationError("cardOrders must be an array")
    orders: List[CardOrder] = []
    for index, entry in enumerate(raw):
        try:
            orders.append(CardOrder.model_validate(entry))
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            raise CardValidationError(
                f"cardOrders[{index}] must be an object with id and order",
                errors=errors,
            ) from exc
    return orders
