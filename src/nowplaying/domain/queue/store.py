"""File-backed song queue with a short-lived snapshot cache.

The store owns the ordered collection. Reads inside the cache window are
served from memory; every successful write replaces the snapshot so the
writing process sees its own changes immediately. There is no locking:
overlapping writers race and the last write wins.
"""

import os
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from loguru import logger

from nowplaying.core.config import Config
from nowplaying.core.errors import NotFound, StorageError, ValidationError

from .markdown import load_songs, render_songs, single_line
from .models import Song, SongStatus, sort_for_presentation
from .status_policy import SetStatus, StatusByPosition, apply_transition

UPDATABLE_FIELDS = frozenset({"title", "artist", "image", "status"})


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SnapshotCache:
    """In-memory copy of the persisted collection with a validity window.

    The clock is injectable so tests can move time forward.
    """

    ttl_seconds: float = 5.0
    clock: Callable[[], float] = time.monotonic
    snapshot: Optional[tuple[Song, ...]] = None
    loaded_at: float = 0.0

    def get(self) -> Optional[list[Song]]:
        """Cached songs if still fresh, else None."""
        if self.snapshot is None:
            return None
        if self.clock() - self.loaded_at >= self.ttl_seconds:
            return None
        return list(self.snapshot)

    def put(self, songs: list[Song]) -> None:
        self.snapshot = tuple(songs)
        self.loaded_at = self.clock()

    def invalidate(self) -> None:
        self.snapshot = None
        self.loaded_at = 0.0


@dataclass
class SongStore:
    """Ordered song queue persisted to a Markdown file."""

    path: Path
    cache: SnapshotCache = field(default_factory=SnapshotCache)
    default_image: str = "/origin.jpg"
    placeholder_title: str = "Untitled Song"
    now: Callable[[], datetime] = _utc_now

    @classmethod
    def from_config(cls, config: Config) -> "SongStore":
        """Build a store from the storage and display configuration."""
        return cls(
            path=config.storage.resolve_songs_file(),
            cache=SnapshotCache(ttl_seconds=config.storage.cache_ttl_seconds),
            default_image=config.display.default_image,
            placeholder_title=config.display.placeholder_title,
        )

    # Persistence

    def _read_file(self) -> list[Song]:
        """Load the collection from disk.

        A missing file is an empty queue. Raises StorageError when the file
        exists but cannot be read or decoded.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                logger.info(f"No songs file at {self.path}, starting with empty queue")
                return []
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read songs file {self.path}: {e}") from e

        return load_songs(content)

    def _write_file(self, songs: list[Song]) -> None:
        """Persist the collection atomically (temp file + rename)."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(render_songs(songs, self.default_image), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"Failed to save songs to {self.path}: {e}")
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.warning(f"Could not remove temp file {tmp}")
            raise StorageError(f"Cannot write songs file {self.path}: {e}") from e

        logger.debug(f"Saved {len(songs)} songs to {self.path}")

    def _songs(self) -> list[Song]:
        """Stored order, through the cache."""
        cached = self.cache.get()
        if cached is not None:
            return cached

        songs = self._read_file()
        self.cache.put(songs)
        logger.debug(f"Loaded songs from file: {len(songs)}")
        return list(songs)

    def _commit(self, songs: list[Song]) -> None:
        """Write then prime the cache; the cache is untouched if the write fails."""
        self._write_file(songs)
        self.cache.put(songs)

    # Queries

    def songs(self) -> list[Song]:
        """All songs in stored order."""
        return self._songs()

    def list_songs(self) -> list[Song]:
        """All songs sorted for presentation: playing, queued, completed."""
        return sort_for_presentation(self._songs())

    def get(self, song_id: str) -> Song:
        for song in self._songs():
            if song.id == song_id:
                return song
        raise NotFound(f"Song not found: {song_id}")

    def current_song(self) -> Optional[Song]:
        """First playing song in stored order, or None."""
        for song in self._songs():
            if song.status == SongStatus.PLAYING:
                return song
        return None

    # Mutations

    def _new_id(self, songs: list[Song], created_at: datetime) -> str:
        taken = {song.id for song in songs}
        candidate = int(created_at.timestamp() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def add(
        self,
        artist: Optional[str],
        title: Optional[str] = None,
        image: Optional[str] = None,
    ) -> Song:
        """Append a new queued song.

        Raises:
            ValidationError: If artist is missing or blank
        """
        artist = single_line(artist or "")
        if not artist:
            raise ValidationError("Artist name is required")

        songs = self._songs()
        created_at = self.now()
        song = Song(
            id=self._new_id(songs, created_at),
            title=single_line(title or "") or self.placeholder_title,
            artist=artist,
            status=SongStatus.QUEUED,
            image=single_line(image or "") or self.default_image,
            created_at=created_at,
        )

        songs.append(song)
        self._commit(songs)
        logger.info(f"Added song {song.id}: {song.artist} - {song.title}")
        return song

    def update(self, song_id: str, changes: Mapping[str, Any]) -> Song:
        """Merge field changes into a song.

        Setting status to playing demotes any other playing song to queued.

        Raises:
            ValidationError: Unknown field, blank artist or unknown status
            NotFound: No song with song_id
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        edits: dict[str, Any] = {}
        if changes.get("title") is not None:
            edits["title"] = single_line(changes["title"]) or self.placeholder_title
        if changes.get("artist") is not None:
            artist = single_line(changes["artist"])
            if not artist:
                raise ValidationError("Artist name is required")
            edits["artist"] = artist
        if changes.get("image") is not None:
            edits["image"] = single_line(changes["image"]) or self.default_image

        status = None
        if changes.get("status") is not None:
            raw_status = changes["status"]
            status = (
                raw_status
                if isinstance(raw_status, SongStatus)
                else SongStatus.parse(str(raw_status))
            )
            if status is None:
                raise ValidationError(f"Invalid status: {raw_status}")

        songs = self._songs()
        index = next((i for i, song in enumerate(songs) if song.id == song_id), None)
        if index is None:
            raise NotFound(f"Song not found: {song_id}")

        if edits:
            songs[index] = replace(songs[index], **edits)
        if status is not None:
            songs = apply_transition(songs, SetStatus(song_id, status))

        self._commit(songs)
        logger.info(f"Updated song {song_id}: {sorted(changes)}")
        return songs[index]

    def remove(self, song_id: str) -> bool:
        """Delete a song. Returns False when no song matched."""
        songs = self._songs()
        remaining = [song for song in songs if song.id != song_id]
        if len(remaining) == len(songs):
            return False

        self._commit(remaining)
        logger.info(f"Removed song {song_id}")
        return True

    def reorder(
        self, ordered_ids: list[str], derive_status_from_position: bool = False
    ) -> list[Song]:
        """Re-sequence the queue to match ordered_ids.

        Unknown ids are ignored and repeated ids count once. Songs missing
        from ordered_ids keep their relative order after the reordered set.
        With derive_status_from_position, index 0 plays and the rest queue.

        Returns:
            The final collection in stored order
        """
        songs = self._songs()
        by_id = {song.id: song for song in songs}

        reordered: list[Song] = []
        seen: set[str] = set()
        for song_id in ordered_ids:
            if song_id in by_id and song_id not in seen:
                reordered.append(by_id[song_id])
                seen.add(song_id)

        missing = [song for song in songs if song.id not in seen]
        if missing:
            logger.warning(f"Reorder omitted {len(missing)} songs, appending them")

        final = reordered + missing
        if derive_status_from_position:
            final = apply_transition(final, StatusByPosition())

        self._commit(final)
        logger.info(f"Reordered {len(final)} songs")
        return final

    def replace_all(self, songs: list[Song]) -> None:
        """Persist a whole collection and prime the cache."""
        ids = [song.id for song in songs]
        if len(ids) != len(set(ids)):
            raise ValidationError("Song ids must be unique")
        self._commit(list(songs))
