from datetime import datetime, timedelta, timezone

import pytest

from spaced_repetition.data.memory import InMemoryCardStore
from spaced_repetition.services.cards import CardLifecycleManager

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store():
    return InMemoryCardStore()


@pytest.fixture
def manager(store, clock):
    return CardLifecycleManager(store, clock=clock)
