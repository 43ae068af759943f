"""
Status policy for the song queue.

Every status change goes through apply_transition(), which takes the whole
collection and returns a corrected copy with at most one playing song.
"""

from dataclasses import dataclass, replace
from typing import Union

from loguru import logger

from .models import Song, SongStatus


@dataclass(frozen=True)
class SetStatus:
    """Explicit status change for one song."""

    song_id: str
    status: SongStatus


@dataclass(frozen=True)
class StatusByPosition:
    """Index 0 plays, everything else waits."""


Transition = Union[SetStatus, StatusByPosition]


def apply_transition(songs: list[Song], transition: Transition) -> list[Song]:
    """Apply a status transition to the full collection.

    Args:
        songs: Collection in stored order
        transition: SetStatus or StatusByPosition

    Returns:
        New list in the same order with statuses corrected
    """
    if isinstance(transition, StatusByPosition):
        return [
            _with_status(song, SongStatus.PLAYING if index == 0 else SongStatus.QUEUED)
            for index, song in enumerate(songs)
        ]

    if isinstance(transition, SetStatus):
        result = []
        for song in songs:
            if song.id == transition.song_id:
                result.append(_with_status(song, transition.status))
            elif (
                transition.status == SongStatus.PLAYING
                and song.status == SongStatus.PLAYING
            ):
                logger.debug(f"Demoting song {song.id} to queued")
                result.append(_with_status(song, SongStatus.QUEUED))
            else:
                result.append(song)
        return result

    raise TypeError(f"Unknown transition: {transition!r}")


def playing_count(songs: list[Song]) -> int:
    """Number of songs currently marked playing."""
    return sum(1 for song in songs if song.status == SongStatus.PLAYING)


def _with_status(song: Song, status: SongStatus) -> Song:
    if song.status == status:
        return song
    return replace(song, status=status)
