"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from resto.persistence import KeyedStore, MemorySubstrate
from resto.state import AppState


class StepClock:
    """Deterministic clock that moves forward one minute per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


class BrokenSubstrate:
    """Substrate whose every call fails, like a store that is not available."""

    def get(self, key: str) -> str | None:
        raise OSError("store unavailable")

    def set(self, key: str, value: str) -> None:
        raise OSError("store unavailable")


@pytest.fixture
def broken_substrate():
    return BrokenSubstrate()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def substrate():
    return MemorySubstrate()


@pytest.fixture
def store(substrate):
    return KeyedStore(substrate)


@pytest.fixture
def state(substrate, clock):
    return AppState.from_substrate(substrate, now=clock)


@pytest.fixture
def pizza(state):
    return state.catalog.add("Pizza", 10.00)
