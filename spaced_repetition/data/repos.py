from contextlib import contextmanager

from django.db import DatabaseError, transaction
from django.utils import timezone
import structlog

from ..domain.cards import ReviewCard
from ..domain.errors import PersistenceError
from .base import SCHEDULING_FIELDS, check_fields
from .models import ReviewCardRecord

logger = structlog.get_logger()


@contextmanager
def _db_errors(operation):
    try:
        yield
    except DatabaseError as exc:
        logger.error("card_store_failed", operation=operation, error=str(exc))
        raise PersistenceError(f"{operation} failed: {exc}") from exc


def _to_card(row: ReviewCardRecord) -> ReviewCard:
    return ReviewCard(
        id=row.id,
        owner_id=row.owner_id,
        source_ref=row.source_ref,
        ease_factor=row.ease_factor,
        interval=row.interval,
        repetitions=row.repetitions,
        next_review_date=row.next_review_date,
        last_reviewed_at=row.last_reviewed_at,
        created_at=row.created_at,
    )


def _scheduling_values(card: ReviewCard) -> dict:
    return {name: getattr(card, name) for name in SCHEDULING_FIELDS}


class DjangoCardStore:
    def find(self, owner_id, predicate=None, due_before=None):
        with _db_errors("find"):
            qs = ReviewCardRecord.objects.filter(owner_id=owner_id)
            if due_before is not None:
                qs = qs.filter(next_review_date__lte=due_before)
            cards = [_to_card(row) for row in qs.order_by("next_review_date", "created_at")]
        if predicate is not None:
            cards = [c for c in cards if predicate(c)]
        return cards

    def get(self, card_id):
        with _db_errors("get"):
            row = ReviewCardRecord.objects.filter(pk=card_id).first()
        return _to_card(row) if row else None

    def get_by_key(self, owner_id, source_ref):
        with _db_errors("get_by_key"):
            row = ReviewCardRecord.objects.filter(owner_id=owner_id, source_ref=source_ref).first()
        return _to_card(row) if row else None

    def get_or_create(self, card):
        """
        Insert `card` unless (owner_id, source_ref) already exists.
        An existing row is returned untouched, progress included.
        """
        defaults = _scheduling_values(card)
        defaults["id"] = card.id
        if card.created_at is not None:
            defaults["created_at"] = card.created_at
        with _db_errors("get_or_create"):
            row, created = ReviewCardRecord.objects.get_or_create(
                owner_id=card.owner_id, source_ref=card.source_ref, defaults=defaults
            )
        return _to_card(row), created

    def upsert(self, card):
        """Write `card`'s scheduling fields over (owner_id, source_ref), keeping an existing id."""
        with _db_errors("upsert"):
            with transaction.atomic():
                row, created = ReviewCardRecord.objects.update_or_create(
                    owner_id=card.owner_id,
                    source_ref=card.source_ref,
                    defaults=_scheduling_values(card),
                    create_defaults={
                        **_scheduling_values(card),
                        "id": card.id,
                        "created_at": card.created_at or timezone.now(),
                    },
                )
        return _to_card(row)

    def update(self, card_id, **fields):
        check_fields(fields)
        with _db_errors("update"):
            updated = ReviewCardRecord.objects.filter(pk=card_id).update(
                updated_at=timezone.now(), **fields
            )
        if not updated:
            return None
        return self.get(card_id)

    def delete(self, card_id):
        with _db_errors("delete"):
            deleted, _ = ReviewCardRecord.objects.filter(pk=card_id).delete()
        return deleted > 0
