from collections.abc import Mapping
import math

from ..config import (
    DEFAULT_EASE_FACTOR,
    EASE_PRECISION,
    FIRST_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from .cards import SchedulingState
from .enums import QUALITY, Rating
from .errors import ValidationError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count(name, value) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{name} must be >= 0, got {value}")
    return value


def coerce_state(state) -> SchedulingState:
    """
    Accept a SchedulingState, a ReviewCard, a mapping holding any subset of
    ease_factor/interval/repetitions, or None. Missing fields fall back to
    the never-reviewed defaults.
    """
    if isinstance(state, SchedulingState):
        fields = {"ease_factor": state.ease_factor, "interval": state.interval,
                  "repetitions": state.repetitions}
    elif state is None:
        fields = {}
    elif isinstance(state, Mapping):
        fields = state
    else:
        fields = {name: getattr(state, name, None)
                  for name in ("ease_factor", "interval", "repetitions")}

    ease = fields.get("ease_factor")
    if ease is None:
        ease = DEFAULT_EASE_FACTOR
    elif isinstance(ease, bool) or not isinstance(ease, (int, float)) or ease <= 0:
        raise ValidationError(f"ease_factor must be a positive number, got {ease!r}")

    return SchedulingState(
        ease_factor=float(ease),
        interval=_count("interval", fields.get("interval")),
        repetitions=_count("repetitions", fields.get("repetitions")),
    )


def next_ease(ease_factor: float, quality: int) -> float:
    miss = 5 - quality
    ease = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    return round(max(MIN_EASE_FACTOR, ease), EASE_PRECISION)


def transition(state, rating) -> SchedulingState:
    """Pure SM-2 step: no clock, no I/O."""
    rating = Rating.parse(rating)
    current = coerce_state(state)
    quality = QUALITY[rating]

    if quality < PASSING_QUALITY:
        interval, repetitions = 0, 0
    else:
        if current.repetitions == 0:
            interval = FIRST_INTERVAL_DAYS
        elif current.repetitions == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            # growth uses the ease from before this review
            interval = _round_half_up(current.interval * current.ease_factor)
        repetitions = current.repetitions + 1

    return SchedulingState(
        ease_factor=next_ease(current.ease_factor, quality),
        interval=interval,
        repetitions=repetitions,
    )


def preview_intervals(state) -> dict:
    current = coerce_state(state)
    return {rating: transition(current, rating).interval for rating in Rating}
