"""Seed the Firestore emulator with a handful of cards for local dev."""
from __future__ import annotations

import os

from cardstack.cards.firestore_repository import FirestoreCardRepository
from cardstack.cards.models import validate_card

OWNER_ID = os.getenv("SEED_USER_ID", "dev-user-001")

SAMPLE_CARDS = [
    {"title": "Welcome", "content": "Your first card.", "type": "text", "order": 0},
    {
        "title": "Featured",
        "content": "A large featured card with a call to action.",
        "type": "large-featured",
        "image_url": "https://picsum.photos/800/400",
        "button_text": "Open",
        "button_action": "/featured",
        "order": 1,
    },
    {"title": "Gallery", "content": "Image card.", "type": "image", "image_url": "https://picsum.photos/400", "order": 2},
]


def _seed_cards() -> None:
    repo = FirestoreCardRepository()
    existing = {c.title for c in repo.list_active(OWNER_ID)}
    for data in SAMPLE_CARDS:
        if data["title"] in existing:
            continue
        card = repo.create(validate_card({**data, "created_by": OWNER_ID}))
        print(f"created card {card.id} ({card.title}) for {OWNER_ID}")


def main() -> None:
    if not os.getenv("FIRESTORE_EMULATOR_HOST"):
        raise SystemExit("FIRESTORE_EMULATOR_HOST must be set; refusing to seed a real project")
    _seed_cards()


if __name__ == "__main__":
    main()
