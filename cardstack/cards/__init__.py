"""Owner-scoped card package."""

from cardstack.cards.errors import CardNotFound, CardsError, CardStorageError, CardValidationError
from cardstack.cards.models import Card, CardCreate, CardOrder, CardType, CardUpdate, validate_card
from cardstack.cards.repository import CardRepository, InMemoryCardRepository

__all__ = [
    "Card",
    "CardCreate",
    "CardUpdate",
    "CardOrder",
    "CardType",
    "validate_card",
    "CardRepository",
    "InMemoryCardRepository",
    "CardsError",
    "CardNotFound",
    "CardValidationError",
    "CardStorageError",
]
