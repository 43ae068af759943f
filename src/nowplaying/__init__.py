"""Now Playing - live event song queue and now-playing display."""

__version__ = "0.1.0"
