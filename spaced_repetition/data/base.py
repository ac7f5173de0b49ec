from typing import Callable, Optional, Protocol

from ..domain.cards import ReviewCard

SCHEDULING_FIELDS = ("ease_factor", "interval", "repetitions", "next_review_date", "last_reviewed_at")


class CardStore(Protocol):
    """
    Persistence boundary for review cards.

    Cards are partitioned by owner_id and unique on (owner_id, source_ref).
    Every method touches at most one card document, except find, which
    returns the owner's cards ordered by next_review_date.
    """

    def find(self, owner_id, predicate: Optional[Callable[[ReviewCard], bool]] = None,
             due_before=None) -> list: ...

    def get(self, card_id) -> Optional[ReviewCard]: ...

    def get_by_key(self, owner_id, source_ref) -> Optional[ReviewCard]: ...

    def get_or_create(self, card: ReviewCard) -> tuple: ...

    def upsert(self, card: ReviewCard) -> ReviewCard: ...

    def update(self, card_id, **fields) -> Optional[ReviewCard]: ...

    def delete(self, card_id) -> bool: ...


def check_fields(fields):
    unknown = set(fields) - set(SCHEDULING_FIELDS)
    if unknown:
        raise TypeError(f"Cannot update card fields: {', '.join(sorted(unknown))}")
