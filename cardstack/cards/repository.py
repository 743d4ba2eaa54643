"""Storage abstractions for cards."""
from __future__ import annotations

import threading
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from cardstack.cards.models import Card, CardOrder
from cardstack.config import runtime_config


def sort_for_display(cards: List[Card]) -> List[Card]:
    """order ascending, newest first among equal orders."""
    by_newest = sorted(cards, key=lambda c: c.created_at, reverse=True)
    return sorted(by_newest, key=lambda c: c.order)


class CardRepository(Protocol):
    def create(self, card: Card) -> Card:
        ...

    def find_one(self, card_id: str, owner_id: str) -> Optional[Card]:
        ...

    def list_active(self, owner_id: str) -> List[Card]:
        ...

    def save(self, card: Card) -> Card:
        ...

    def mark_inactive(self, card_id: str, updated_at: datetime) -> None:
        ...

    def bulk_update_order(self, owner_id: str, orders: List[CardOrder], updated_at: datetime) -> int:
        ...


class InMemoryCardRepository:
    """Process-local repository keyed by card id."""

    def __init__(self) -> None:
        self._items: Dict[str, Card] = {}
        self._lock = threading.Lock()

    def create(self, card: Card) -> Card:
        with self._lock:
            self._items[card.id] = card.model_copy(deep=True)
        return card

    def find_one(self, card_id: str, owner_id: str) -> Optional[Card]:
        with self._lock:
            card = self._items.get(card_id)
        if not card or card.created_by != owner_id:
            return None
        return card.model_copy(deep=True)

    def list_active(self, owner_id: str) -> List[Card]:
        with self._lock:
            cards = [
                c.model_copy(deep=True)
                for c in self._items.values()
                if c.created_by == owner_id and c.is_active
            ]
        return sort_for_display(cards)

    def save(self, card: Card) -> Card:
        with self._lock:
            self._items[card.id] = card.model_copy(deep=True)
        return card

    def mark_inactive(self, card_id: str, updated_at: datetime) -> None:
        with self._lock:
            card = self._items[card_id]
            card.is_active = False
            card.updated_at = updated_at

    def bulk_update_order(self, owner_id: str, orders: List[CardOrder], updated_at: datetime) -> int:
        matched = 0
        with self._lock:
            for entry in orders:
                card = self._items.get(entry.id)
                if not card or card.created_by != owner_id:
                    continue
                card.order = entry.order
                card.updated_at = updated_at
                matched += 1
        return matched


def card_repo_from_env() -> CardRepository:
    backend = runtime_config.get_cards_backend()
    if backend == "firestore":
        try:
            from cardstack.cards.firestore_repository import FirestoreCardRepository

            return FirestoreCardRepository()
        except Exception as e:
            raise RuntimeError(f"Failed to initialize FirestoreCardRepository: {e}")
    if backend == "memory":
        return InMemoryCardRepository()
    raise RuntimeError(f"CARDS_BACKEND must be 'memory' or 'firestore'. Got: '{backend}'")
