"""
Markdown codec for the song queue file.

The queue is stored as a human-editable document:

    # Songs Queue

    ## 1718000000000
    - **Title:** Song
    - **Artist:** Someone
    - **Status:** queued
    - **Image:** /origin.jpg
    - **Created:** 2024-06-10T06:13:20+00:00

Parsing is lenient: each record becomes either Parsed(song) or
Skipped(reason), and skipped records are logged and dropped instead of
failing the whole load.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from loguru import logger

from .models import Song, SongStatus

DOCUMENT_TITLE = "# Songs Queue"
EMPTY_MARKER = "*No songs in queue*"

_RECORD_HEADER = re.compile(r"^##(?!#)\s*(?P<id>.*)$")
_FIELD_LINE = re.compile(r"^[-*]\s*\*\*(?P<label>[A-Za-z ]+):\*\*\s*(?P<value>.*)$")

# Field label (lowercase) -> record key
_LABELS: dict[str, str] = {
    "title": "title",
    "artist": "artist",
    "status": "status",
    "image": "image",
    "created": "created_at",
}

REQUIRED_FIELDS = ("id", "title", "artist", "status")


@dataclass(frozen=True)
class Parsed:
    """A record that produced a valid song."""

    song: Song


@dataclass(frozen=True)
class Skipped:
    """A record that was dropped, with the reason why."""

    record_id: Optional[str]
    reason: str


ParseResult = Union[Parsed, Skipped]


def _clean(value: str) -> str:
    """Trim surrounding whitespace; anything else in a value is kept verbatim."""
    return value.strip()


def _parse_timestamp(value: str, record_id: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Song {record_id}: unreadable created timestamp {value!r}")
        return None


def _build_song(fields: dict[str, str]) -> ParseResult:
    """Validate the collected fields of one record."""
    record_id = fields.get("id") or None
    missing = [name for name in REQUIRED_FIELDS if not fields.get(name)]
    if missing:
        return Skipped(record_id, f"missing {', '.join(missing)}")

    status = SongStatus.parse(fields["status"])
    if status is None:
        return Skipped(record_id, f"unknown status {fields['status']!r}")

    return Parsed(
        Song(
            id=fields["id"],
            title=fields["title"],
            artist=fields["artist"],
            status=status,
            image=fields.get("image") or None,
            created_at=_parse_timestamp(fields.get("created_at", ""), fields["id"]),
        )
    )


def parse_records(content: str) -> list[ParseResult]:
    """Split a document into records and parse each one.

    Lines outside a record (the document title, the empty marker, notes
    added by hand) are ignored, as are unknown field labels.
    """
    results: list[ParseResult] = []
    current: Optional[dict[str, str]] = None

    for line in content.splitlines():
        stripped = line.strip()

        header = _RECORD_HEADER.match(stripped)
        if header:
            if current is not None:
                results.append(_build_song(current))
            current = {"id": _clean(header.group("id"))}
            continue

        if current is None:
            continue

        field_line = _FIELD_LINE.match(stripped)
        if field_line:
            key = _LABELS.get(field_line.group("label").strip().lower())
            if key:
                current[key] = _clean(field_line.group("value"))

    if current is not None:
        results.append(_build_song(current))

    return results


def load_songs(content: str) -> list[Song]:
    """Parse a document, logging and dropping invalid records."""
    songs: list[Song] = []
    skipped = 0

    for result in parse_records(content):
        if isinstance(result, Parsed):
            songs.append(result.song)
        else:
            skipped += 1
            logger.warning(
                f"Skipping song record {result.record_id or '<no id>'}: {result.reason}"
            )

    if skipped:
        logger.warning(f"Filtered out {skipped} invalid songs")

    return songs


def single_line(value: str) -> str:
    """Collapse a value onto one line, splitting where the parser splits lines."""
    return " ".join(value.splitlines()).strip()


def render_songs(songs: list[Song], default_image: str) -> str:
    """Render songs as a Markdown document, in stored order."""
    lines = [DOCUMENT_TITLE, ""]

    if not songs:
        lines.append(EMPTY_MARKER)
        return "\n".join(lines) + "\n"

    for song in songs:
        created = song.created_at.isoformat() if song.created_at else ""
        lines.extend(
            [
                f"## {single_line(song.id)}",
                f"- **Title:** {single_line(song.title)}",
                f"- **Artist:** {single_line(song.artist)}",
                f"- **Status:** {song.status.value}",
                f"- **Image:** {single_line(song.image or default_image)}",
                f"- **Created:** {created}",
                "",
            ]
        )

    return "\n".join(lines)
