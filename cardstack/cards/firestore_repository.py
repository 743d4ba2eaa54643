"""Firestore-backed card repository."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from cardstack.cards.models import Card, CardOrder
from cardstack.cards.repository import sort_for_display
from cardstack.config import runtime_config

try:  # pragma: no cover - optional dependency
    from google.cloud import firestore  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    firestore = None

logger = logging.getLogger(__name__)


class FirestoreCardRepository:
    """Collections:
    - cards/{card_id}  (name overridable via CARDS_COLLECTION)
    """

    def __init__(self, client: Optional[object] = None, collection: Optional[str] = None) -> None:
        if client is None:
            if firestore is None:  # pragma: no cover - optional dependency
                raise RuntimeError("google-cloud-firestore not installed")
            project = runtime_config.get_firestore_project()
            if not project:
                raise RuntimeError("GCP project is required for Firestore cards repo")
            client = firestore.Client(project=project)  # type: ignore[arg-type]
        self._client = client
        self._collection = collection or runtime_config.get_cards_collection()

    def _col(self):
        return self._client.collection(self._collection)

    def create(self, card: Card) -> Card:
        self._col().document(card.id).set(card.model_dump())
        return card

    def find_one(self, card_id: str, owner_id: str) -> Optional[Card]:
        snap = self._col().document(card_id).get()
        if not snap or not snap.exists:
            return None
        data = snap.to_dict() or {}
        if data.get("created_by") != owner_id:
            return None
        return Card(**data)

    def list_active(self, owner_id: str) -> List[Card]:
        query = self._col().where("created_by", "==", owner_id).where("is_active", "==", True)
        return sort_for_display([Card(**d.to_dict()) for d in query.stream()])

    def save(self, card: Card) -> Card:
        self._col().document(card.id).set(card.model_dump())
        return card

    def mark_inactive(self, card_id: str, updated_at: datetime) -> None:
        self._col().document(card_id).update({"is_active": False, "updated_at": updated_at})

    def bulk_update_order(self, owner_id: str, orders: List[CardOrder], updated_at: datetime) -> int:
        # independent per-document writes; no batch, no transaction
        matched = 0
        for entry in orders:
            doc = self._col().document(entry.id)
            snap = doc.get()
            if not snap or not snap.exists:
                continue
            if (snap.to_dict() or {}).get("created_by") != owner_id:
                continue
            doc.update({"order": entry.order, "updated_at": updated_at})
            matched += 1
        logger.debug("reorder matched %s of %s cards for %s", matched, len(orders), owner_id)
        return matched
