from django.utils import timezone
import structlog

from ..config import MAX_OWNER_ID_LENGTH
from ..data.repos import DjangoCardStore
from ..domain.cards import (
    CardStats,
    InitializationReport,
    ReviewCard,
    exam_source_ref,
    require_key,
)
from ..domain.enums import Rating
from ..domain.errors import NotFoundError, ReviewSchedulerError, ValidationError
from ..domain.logic import preview_intervals, transition
from ..utils.time import end_of_day, ensure_aware, to_local_iso

logger = structlog.get_logger()


class CardLifecycleManager:
    """
    Bridges the pure scheduler to a CardStore.

    Only this layer reads the clock. Store errors propagate unchanged and
    nothing is retried: a failed write means the review was not recorded.
    """

    def __init__(self, store, clock=timezone.now):
        self.store = store
        self.clock = clock

    def _owned_card(self, card_id, owner_id=None) -> ReviewCard:
        card = self.store.get(card_id)
        if card is None or (owner_id is not None and card.owner_id != owner_id):
            raise NotFoundError(f"Card {card_id} not found")
        return card

    def get_due_cards(self, owner_id, as_of=None):
        as_of = ensure_aware(as_of) if as_of else self.clock()
        cards = self.store.find(owner_id, due_before=as_of)
        return sorted(cards, key=lambda c: c.next_review_date)

    def get_all_cards(self, owner_id):
        return sorted(self.store.find(owner_id), key=lambda c: c.next_review_date)

    def get_stats(self, owner_id, as_of=None) -> CardStats:
        today_end = end_of_day(ensure_aware(as_of) if as_of else self.clock())
        cards = self.store.find(owner_id)
        return CardStats(
            due_today=sum(1 for c in cards if c.next_review_date <= today_end),
            learned=sum(1 for c in cards if c.is_learned),
            total_cards=len(cards),
        )

    def initialize_cards(self, owner_id, source_refs) -> InitializationReport:
        """
        Find-or-create a default card per source ref. Existing cards keep
        their progress. A failing ref is reported and the batch continues.
        """
        owner_id = require_key("owner_id", owner_id, MAX_OWNER_ID_LENGTH)
        if isinstance(source_refs, str):
            raise ValidationError("source_refs must be a list of refs, not a single string")
        now = self.clock()
        report = InitializationReport()

        for source_ref in dict.fromkeys(source_refs):
            try:
                _, created = self.store.get_or_create(ReviewCard.new(owner_id, source_ref, now))
            except ReviewSchedulerError as exc:
                logger.warning("card_initialization_failed",
                    owner_id=owner_id,
                    source_ref=source_ref,
                    error=str(exc),
                )
                report.failed[source_ref] = str(exc)
                continue
            (report.created if created else report.existing).append(source_ref)

        logger.info("cards_initialized",
            owner_id=owner_id,
            created=len(report.created),
            existing=len(report.existing),
            failed=len(report.failed),
        )
        return report

    def import_exam(self, owner_id, exam_id, question_count: int) -> InitializationReport:
        exam_id = require_key("exam_id", exam_id)
        if isinstance(question_count, bool) or not isinstance(question_count, int) or question_count < 0:
            raise ValidationError(f"question_count must be a non-negative integer, got {question_count!r}")
        refs = [exam_source_ref(exam_id, i) for i in range(question_count)]
        return self.initialize_cards(owner_id, refs)

    def review_card(self, card_id, rating, owner_id=None) -> ReviewCard:
        rating = Rating.parse(rating)
        logger.info("review_received",
            owner_id=owner_id,
            card_id=str(card_id),
            rating=rating.value,
        )

        card = self._owned_card(card_id, owner_id)
        now = self.clock()
        reviewed = card.reviewed(transition(card, rating), now)

        saved = self.store.update(
            card.id,
            ease_factor=reviewed.ease_factor,
            interval=reviewed.interval,
            repetitions=reviewed.repetitions,
            next_review_date=reviewed.next_review_date,
            last_reviewed_at=reviewed.last_reviewed_at,
        )
        if saved is None:
            # deleted between load and write
            raise NotFoundError(f"Card {card_id} not found")

        self._log_scheduled(saved)
        return saved

    def review_or_create(self, owner_id, source_ref, rating) -> ReviewCard:
        rating = Rating.parse(rating)
        now = self.clock()
        card = self.store.get_by_key(owner_id, source_ref)
        if card is None:
            card = ReviewCard.new(owner_id, source_ref, now)

        logger.info("review_received",
            owner_id=owner_id,
            card_id=card.id,
            source_ref=source_ref,
            rating=rating.value,
        )

        saved = self.store.upsert(card.reviewed(transition(card, rating), now))
        self._log_scheduled(saved)
        return saved

    def delete_card(self, card_id, owner_id=None, strict=False) -> None:
        card = self.store.get(card_id)
        if card is None or (owner_id is not None and card.owner_id != owner_id):
            if strict:
                raise NotFoundError(f"Card {card_id} not found")
            logger.info("card_delete_skipped", owner_id=owner_id, card_id=str(card_id))
            return
        self.store.delete(card.id)
        logger.info("card_deleted", owner_id=card.owner_id, card_id=card.id)

    def preview(self, card_id, owner_id=None) -> dict:
        return preview_intervals(self._owned_card(card_id, owner_id))

    def _log_scheduled(self, card):
        logger.info("review_scheduled",
            owner_id=card.owner_id,
            card_id=card.id,
            ease_factor=card.ease_factor,
            interval_days=card.interval,
            repetitions=card.repetitions,
            next_review_utc=card.next_review_date.isoformat(),
            next_review_local=to_local_iso(card.next_review_date),
        )


def get_manager() -> CardLifecycleManager:
    return CardLifecycleManager(DjangoCardStore())
