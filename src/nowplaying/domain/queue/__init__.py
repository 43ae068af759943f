"""
Song queue domain module.

Provides the ordered song queue, its status policy and the Markdown file
format it is persisted in.
"""

from .markdown import (
    Parsed,
    Skipped,
    load_songs,
    parse_records,
    render_songs,
    single_line,
)
from .models import STATUS_PRECEDENCE, Song, SongStatus, sort_for_presentation
from .status_policy import (
    SetStatus,
    StatusByPosition,
    Transition,
    apply_transition,
    playing_count,
)
from .store import SnapshotCache, SongStore

__all__ = [
    "Parsed",
    "Skipped",
    "load_songs",
    "parse_records",
    "render_songs",
    "single_line",
    "STATUS_PRECEDENCE",
    "Song",
    "SongStatus",
    "sort_for_presentation",
    "SetStatus",
    "StatusByPosition",
    "Transition",
    "apply_transition",
    "playing_count",
    "SnapshotCache",
    "SongStore",
]
