"""Tests for the single-playing status policy."""

import pytest

from nowplaying.domain.queue import (
    SetStatus,
    Song,
    SongStatus,
    StatusByPosition,
    apply_transition,
    playing_count,
)


def make_song(song_id: str, status: SongStatus = SongStatus.QUEUED) -> Song:
    return Song(id=song_id, title=f"Title {song_id}", artist=f"Artist {song_id}", status=status)


@pytest.fixture
def songs() -> list[Song]:
    return [
        make_song("a", SongStatus.PLAYING),
        make_song("b"),
        make_song("c", SongStatus.COMPLETED),
    ]


class TestSetStatus:
    """Explicit status changes."""

    def test_playing_demotes_current_playing(self, songs: list[Song]) -> None:
        result = apply_transition(songs, SetStatus("b", SongStatus.PLAYING))

        assert [s.status for s in result] == [
            SongStatus.QUEUED,
            SongStatus.PLAYING,
            SongStatus.COMPLETED,
        ]
        assert playing_count(result) == 1

    def test_completed_leaves_others_alone(self, songs: list[Song]) -> None:
        result = apply_transition(songs, SetStatus("b", SongStatus.COMPLETED))

        assert result[0].status == SongStatus.PLAYING
        assert result[1].status == SongStatus.COMPLETED
        assert result[2].status == SongStatus.COMPLETED

    def test_completing_playing_song_leaves_nothing_playing(self, songs: list[Song]) -> None:
        result = apply_transition(songs, SetStatus("a", SongStatus.COMPLETED))

        assert playing_count(result) == 0

    def test_already_playing_song_stays_playing(self, songs: list[Song]) -> None:
        result = apply_transition(songs, SetStatus("a", SongStatus.PLAYING))

        assert result == songs

    def test_repairs_multiple_playing(self) -> None:
        """A hand-edited file with two playing songs is corrected on the next play."""
        songs = [
            make_song("a", SongStatus.PLAYING),
            make_song("b", SongStatus.PLAYING),
            make_song("c"),
        ]

        result = apply_transition(songs, SetStatus("c", SongStatus.PLAYING))

        assert [s.status for s in result] == [
            SongStatus.QUEUED,
            SongStatus.QUEUED,
            SongStatus.PLAYING,
        ]

    def test_input_not_mutated(self, songs: list[Song]) -> None:
        before = list(songs)
        apply_transition(songs, SetStatus("b", SongStatus.PLAYING))
        assert songs == before

    def test_preserves_order_and_fields(self, songs: list[Song]) -> None:
        result = apply_transition(songs, SetStatus("c", SongStatus.PLAYING))

        assert [s.id for s in result] == ["a", "b", "c"]
        assert result[2].title == "Title c"


class TestStatusByPosition:
    """Status derived from list position."""

    def test_first_plays_rest_queue(self, songs: list[Song]) -> None:
        result = apply_transition(list(reversed(songs)), StatusByPosition())

        assert [s.id for s in result] == ["c", "b", "a"]
        assert [s.status for s in result] == [
            SongStatus.PLAYING,
            SongStatus.QUEUED,
            SongStatus.QUEUED,
        ]

    def test_empty_collection(self) -> None:
        assert apply_transition([], StatusByPosition()) == []

    def test_idempotent(self, songs: list[Song]) -> None:
        once = apply_transition(songs, StatusByPosition())
        twice = apply_transition(once, StatusByPosition())
        assert once == twice


def test_unknown_transition_rejected(songs: list[Song]) -> None:
    with pytest.raises(TypeError):
        apply_transition(songs, "play")  # type: ignore[arg-type]
