from dataclasses import replace
import threading

from .base import check_fields


class InMemoryCardStore:
    """
    Dict-backed CardStore. Values handed out are copies, so callers never
    share state with the store; concurrent writers get last-write-wins.
    """

    def __init__(self, cards=()):
        self._lock = threading.Lock()
        self._cards = {}
        self._keys = {}
        for card in cards:
            self._put(replace(card))

    def _put(self, card):
        self._cards[card.id] = card
        self._keys[(card.owner_id, card.source_ref)] = card.id

    def __len__(self):
        return len(self._cards)

    def find(self, owner_id, predicate=None, due_before=None):
        with self._lock:
            cards = [replace(c) for c in self._cards.values() if c.owner_id == owner_id]
        if due_before is not None:
            cards = [c for c in cards if c.next_review_date <= due_before]
        if predicate is not None:
            cards = [c for c in cards if predicate(c)]
        return sorted(cards, key=lambda c: c.next_review_date)

    def get(self, card_id):
        with self._lock:
            card = self._cards.get(card_id)
        return replace(card) if card else None

    def get_by_key(self, owner_id, source_ref):
        with self._lock:
            card_id = self._keys.get((owner_id, source_ref))
            card = self._cards.get(card_id)
        return replace(card) if card else None

    def get_or_create(self, card):
        with self._lock:
            card_id = self._keys.get((card.owner_id, card.source_ref))
            if card_id is not None:
                return replace(self._cards[card_id]), False
            self._put(replace(card))
        return replace(card), True

    def upsert(self, card):
        with self._lock:
            card_id = self._keys.get((card.owner_id, card.source_ref))
            if card_id is not None:
                existing = self._cards[card_id]
                card = replace(card, id=existing.id, created_at=existing.created_at)
            self._put(replace(card))
        return replace(card)

    def update(self, card_id, **fields):
        check_fields(fields)
        with self._lock:
            card = self._cards.get(card_id)
            if card is None:
                return None
            card = replace(card, **fields)
            self._put(card)
        return replace(card)

    def delete(self, card_id):
        with self._lock:
            card = self._cards.pop(card_id, None)
            if card is None:
                return False
            del self._keys[(card.owner_id, card.source_ref)]
        return True
