"""Card domain errors."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class CardsError(Exception):
    """Base cards error."""


class CardNotFound(CardsError):
    """Raised when a card is missing or owned by someone else."""


class CardValidationError(CardsError):
    """Raised when a payload or document breaks the card schema."""

    def __init__(self, message: str, code: str = "cards.validation_error", errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = errors or []


class CardStorageError(CardsError):
    """Raised when the backing store fails."""
