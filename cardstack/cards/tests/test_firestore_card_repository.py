from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from cardstack.cards.firestore_repository import FirestoreCardRepository
from cardstack.cards.models import CardOrder, validate_card


class _Snap:
    def __init__(self, data: Optional[Dict[str, Any]]) -> None:
        self._data = data
        self.exists = data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class _DocRef:
    def __init__(self, store: Dict[str, Dict[str, Any]], doc_id: str) -> None:
        self._store = store
        self._id = doc_id

    def get(self):
        return _Snap(self._store.get(self._id))

    def set(self, data):
        self._store[self._id] = dict(data)

    def update(self, data):
        if self._id not in self._store:
            raise KeyError(self._id)
        self._store[self._id].update(data)


class _Query:
    def __init__(self, store, filters: List[tuple]) -> None:
        self._store = store
        self._filters = filters

    def where(self, field, op, value):
        assert op == "=="
        return _Query(self._store, self._filters + [(field, value)])

    def stream(self):
        for data in self._store.values():
            if all(data.get(f) == v for f, v in self._filters):
                yield _Snap(data)


class _Collection(_Query):
    def __init__(self, store) -> None:
        super().__init__(store, [])

    def document(self, doc_id):
        return _DocRef(self._store, doc_id)


class FakeFirestore:
    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def collection(self, name):
        return _Collection(self.collections.setdefault(name, {}))


def _card(owner="u1", **fields):
    data = {"title": "T", "content": "C", "type": "text", "created_by": owner}
    data.update(fields)
    return validate_card(data)


def _repo():
    client = FakeFirestore()
    return client, FirestoreCardRepository(client=client, collection="cards_test")


def test_create_and_find_one_scoped_by_owner():
    client, repo = _repo()
    card = repo.create(_card())
    stored = client.collections["cards_test"][card.id]
    assert stored["created_by"] == "u1"
    assert stored["type"] == "text"
    assert repo.find_one(card.id, "u1").title == "T"
    assert repo.find_one(card.id, "u2") is None
    assert repo.find_one("missing", "u1") is None


def test_list_active_filters_and_sorts():
    _, repo = _repo()
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    older = repo.create(_card(order=1, created_at=base))
    newer = repo.create(_card(order=1, created_at=base + timedelta(minutes=1)))
    first = repo.create(_card(order=0, created_at=base))
    hidden = _card(order=-1)
    hidden.is_active = False
    repo.create(hidden)
    repo.create(_card(owner="u2"))

    assert [c.id for c in repo.list_active("u1")] == [first.id, newer.id, older.id]


def test_save_overwrites_document():
    _, repo = _repo()
    card = repo.create(_card())
    card.is_active = False
    repo.save(card)
    assert repo.find_one(card.id, "u1").is_active is False
    assert repo.list_active("u1") == []


def test_bulk_update_order_skips_foreign_and_missing():
    client, repo = _repo()
    mine = repo.create(_card())
    theirs = repo.create(_card(owner="u2"))
    stamp = datetime(2024, 2, 1, tzinfo=timezone.utc)
    matched = repo.bulk_update_order(
        "u1",
        [CardOrder(id=mine.id, order=5), CardOrder(id=theirs.id, order=6), CardOrder(id="ghost", order=1)],
        stamp,
    )
    assert matched == 1
    assert client.collections["cards_test"][mine.id]["order"] == 5
    assert client.collections["cards_test"][mine.id]["updated_at"] == stamp
    assert client.collections["cards_test"][theirs.id]["order"] == 0
    assert "ghost" not in client.collections["cards_test"]


def test_mark_inactive_writes_only_flag_and_timestamp():
    client, repo = _repo()
    card = repo.create(_card(order=1))
    stale = repo.find_one(card.id, "u1")
    # a concurrent reorder and edit land after the delete read the card
    client.collections["cards_test"][card.id].update({"order": 9, "title": "Edited"})
    stamp = datetime(2024, 3, 1, tzinfo=timezone.utc)
    repo.mark_inactive(stale.id, stamp)

    stored = client.collections["cards_test"][card.id]
    assert stored["is_active"] is False
    assert stored["updated_at"] == stamp
    assert stored["order"] == 9
    assert stored["title"] == "Edited"
