from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Optional
import uuid

from ..config import (
    DEFAULT_EASE_FACTOR,
    LEARNED_REPETITIONS,
    MAX_OWNER_ID_LENGTH,
    MAX_SOURCE_REF_LENGTH,
)
from .errors import ValidationError


def new_card_id() -> str:
    return uuid.uuid4().hex


def exam_source_ref(exam_id, question_index: int) -> str:
    return f"{exam_id}#q{question_index}"


def require_key(name: str, value, max_length=None) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} must not be blank")
    if max_length is not None and len(str(value)) > max_length:
        raise ValidationError(f"{name} must be at most {max_length} characters")
    return str(value)


@dataclass(frozen=True)
class SchedulingState:
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0


@dataclass
class ReviewCard:
    """
    One schedulable unit: a learner's progress on one piece of material.

    (owner_id, source_ref) is the natural key; id is the storage key.
    A card that was never reviewed has last_reviewed_at = None and is due
    from its creation time.
    """

    owner_id: str
    source_ref: str
    id: str = field(default_factory=new_card_id)
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0
    repetitions: int = 0
    next_review_date: Optional[datetime] = None
    last_reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def new(cls, owner_id, source_ref, now: datetime) -> "ReviewCard":
        return cls(
            owner_id=require_key("owner_id", owner_id, MAX_OWNER_ID_LENGTH),
            source_ref=require_key("source_ref", source_ref, MAX_SOURCE_REF_LENGTH),
            next_review_date=now,
            created_at=now,
        )

    @property
    def state(self) -> SchedulingState:
        return SchedulingState(self.ease_factor, self.interval, self.repetitions)

    @property
    def is_learned(self) -> bool:
        return self.repetitions >= LEARNED_REPETITIONS

    def is_due(self, as_of: datetime) -> bool:
        return self.next_review_date <= as_of

    def reviewed(self, state: SchedulingState, now: datetime) -> "ReviewCard":
        """Copy of this card carrying `state`, reviewed at `now`."""
        return replace(
            self,
            ease_factor=state.ease_factor,
            interval=state.interval,
            repetitions=state.repetitions,
            last_reviewed_at=now,
            next_review_date=now + timedelta(days=state.interval),
        )


@dataclass(frozen=True)
class CardStats:
    due_today: int
    learned: int
    total_cards: int


@dataclass
class InitializationReport:
    created: list = field(default_factory=list)
    existing: list = field(default_factory=list)
    failed: dict = field(default_factory=dict)  # source_ref -> error message

    @property
    def succeeded(self) -> list:
        return self.created + self.existing

    @property
    def ok(self) -> bool:
        return not self.failed
