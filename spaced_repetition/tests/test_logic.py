import itertools
import logging

import pytest

from spaced_repetition.domain.cards import ReviewCard, SchedulingState
from spaced_repetition.domain.enums import QUALITY, Rating
from spaced_repetition.domain.errors import ValidationError
from spaced_repetition.domain.logic import coerce_state, next_ease, preview_intervals, transition

logger = logging.getLogger(__name__)


def state(ease=2.5, interval=0, repetitions=0):
    return SchedulingState(ease_factor=ease, interval=interval, repetitions=repetitions)


# Walkthrough of a card's first reviews

def test_new_card_first_good():
    assert transition(state(), "good") == state(2.5, 1, 1)


def test_second_consecutive_good():
    assert transition(state(2.5, 1, 1), "good") == state(2.5, 6, 2)


def test_third_consecutive_good_compounds():
    assert transition(state(2.5, 6, 2), "good") == state(2.5, 15, 3)


def test_again_after_progress_resets_streak_and_lowers_ease():
    assert transition(state(2.5, 15, 3), "again") == state(1.7, 0, 0)


def test_easy_from_fresh_card():
    assert transition(state(), Rating.EASY) == state(2.6, 1, 1)
    logger.info("✓ Passed: easy on a new card gives 1 day and ease 2.6")


# Rating table

def test_quality_table_is_fixed():
    assert QUALITY == {Rating.AGAIN: 0, Rating.HARD: 2, Rating.GOOD: 4, Rating.EASY: 5}


def test_hard_is_below_passing_quality():
    """hard maps to quality 2, so it resets like again but costs less ease."""
    result = transition(state(2.5, 15, 3), "hard")
    assert (result.interval, result.repetitions) == (0, 0)
    assert result.ease_factor == pytest.approx(2.18)


@pytest.mark.parametrize("value", ["AGAIN", "ok", "", None, 3])
def test_unknown_rating_rejected(value):
    with pytest.raises(ValidationError):
        transition(state(), value)


# Ease factor

def test_ease_never_drops_below_floor():
    current = state()
    for _ in range(10):
        current = transition(current, "again")
    assert current.ease_factor == 1.3


def test_ease_formula_per_quality():
    assert next_ease(2.5, 5) == pytest.approx(2.6)
    assert next_ease(2.5, 4) == pytest.approx(2.5)
    assert next_ease(2.5, 2) == pytest.approx(2.18)
    assert next_ease(2.5, 0) == pytest.approx(1.7)


def test_ease_keeps_full_precision():
    # off the 0.01 grid: good leaves ease unchanged, easy adds exactly 0.1
    assert transition({"ease_factor": 2.537, "interval": 6, "repetitions": 2}, "good") == state(2.537, 15, 3)
    assert transition({"ease_factor": 2.537}, "easy").ease_factor == pytest.approx(2.637, abs=1e-12)
    assert transition({"ease_factor": 2.111}, "hard").ease_factor == pytest.approx(1.791, abs=1e-12)


def test_interval_growth_uses_ease_before_update():
    # 10 * 2.5 = 25, even though easy raises ease to 2.6
    result = transition(state(2.5, 10, 4), "easy")
    assert result == state(2.6, 25, 5)


def test_interval_rounds_half_up():
    # 5 * 2.5 = 12.5
    assert transition(state(2.5, 5, 2), "good").interval == 13


def test_interval_has_no_upper_bound():
    current = state()
    for _ in range(20):
        current = transition(current, "easy")
    assert current.interval > 365 * 10


def test_again_then_success_restarts_progression():
    current = transition(state(2.5, 15, 3), "again")
    current = transition(current, "good")
    assert (current.interval, current.repetitions) == (1, 1)
    current = transition(current, "good")
    assert (current.interval, current.repetitions) == (6, 2)


# Input state

def test_missing_fields_default_to_new_card():
    assert coerce_state(None) == state()
    assert coerce_state({}) == state()
    assert coerce_state({"interval": 6, "repetitions": 2}) == state(2.5, 6, 2)
    assert transition({}, "good") == transition(state(), "good")


def test_review_card_is_accepted_as_state():
    card = ReviewCard(owner_id="u1", source_ref="examA#q1", ease_factor=2.2, interval=6, repetitions=2)
    assert transition(card, "good") == state(2.2, 13, 3)


@pytest.mark.parametrize("bad", [
    {"interval": -1},
    {"repetitions": -3},
    {"interval": 1.5},
    {"ease_factor": 0},
    {"ease_factor": "2.5"},
])
def test_malformed_state_rejected(bad):
    with pytest.raises(ValidationError):
        transition(bad, "good")


def test_transition_is_deterministic():
    current = state(2.36, 9, 4)
    assert transition(current, "good") == transition(current, "good")


def test_invariants_hold_over_rating_sequences():
    for sequence in itertools.product(list(Rating), repeat=4):
        current = state()
        for rating in sequence:
            current = transition(current, rating)
            assert current.ease_factor >= 1.3
            assert current.interval >= 0
            assert isinstance(current.interval, int)
            if rating in (Rating.AGAIN, Rating.HARD):
                assert current.repetitions == 0
    logger.info("✓ Passed: invariants hold for every 4-review sequence")


def test_preview_intervals():
    assert preview_intervals(state(2.5, 6, 2)) == {
        Rating.AGAIN: 0,
        Rating.HARD: 0,
        Rating.GOOD: 15,
        Rating.EASY: 15,
    }
