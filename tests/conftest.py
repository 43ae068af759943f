"""Shared fixtures for domain tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from loguru import logger

from nowplaying.domain.queue import SnapshotCache, SongStore


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class TickingNow:
    """Wall clock that moves one second per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def songs_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "songs.md"


@pytest.fixture
def store(songs_path: Path, clock: FakeClock) -> SongStore:
    """Store writing under tmp_path with controllable time."""
    return SongStore(
        path=songs_path,
        cache=SnapshotCache(ttl_seconds=5.0, clock=clock),
        now=TickingNow(datetime(2024, 6, 1, 20, 0, tzinfo=timezone.utc)),
    )
