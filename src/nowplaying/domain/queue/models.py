"""
Song queue domain models.

Contains data structures for representing queue entries and their status.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SongStatus(str, Enum):
    """Lifecycle phase of a song in the queue."""

    PLAYING = "playing"
    QUEUED = "queued"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: str) -> Optional["SongStatus"]:
        """Return the matching status, or None for unknown values."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# Presentation order: playing first, then queued, then completed
STATUS_PRECEDENCE: dict[SongStatus, int] = {
    SongStatus.PLAYING: 0,
    SongStatus.QUEUED: 1,
    SongStatus.COMPLETED: 2,
}


@dataclass(frozen=True)
class Song:
    """Represents one entry in the queue.

    Songs are immutable; edits produce a new instance via dataclasses.replace.
    """

    id: str
    title: str
    artist: str
    status: SongStatus = SongStatus.QUEUED
    image: Optional[str] = None
    created_at: Optional[datetime] = None


def sort_for_presentation(songs: list[Song]) -> list[Song]:
    """Sort by status precedence, keeping stored order within a status."""
    return sorted(songs, key=lambda song: STATUS_PRECEDENCE[song.status])
