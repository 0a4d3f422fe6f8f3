"""Core data models for Cantabile."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .artists import ArtistSet


U16_MAX = 65535


@dataclass(frozen=True)
class Cover:
    """Embedded album art."""

    data: bytes
    mime_type: str


@dataclass(slots=True)
class TagFields:
    """Tag values decoded from a single audio file.

    Every field is optional here; the builder decides which ones are required.
    """
    title: Optional[str] = None
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    track_number: Optional[int] = None
    cover: Optional[Cover] = None


@dataclass(frozen=True)
class Track:
    """A validated audio file record, ready to be stored.

    Built by :func:`cantabile.core.builder.build_track`; never mutated afterwards.
    """
    path: Path
    title: str
    artists: ArtistSet
    album_name: str
    album_artists: ArtistSet
    position: int
    album_cover: Optional[Cover] = None
    genre: str = ""
    year: Optional[int] = None

    @property
    def album_path(self) -> Path:
        """Albums are keyed by the directory holding their tracks."""
        return self.path.parent


def parse_int(value: Any) -> Optional[int]:
    """Parse an integer from various input types.

    Handles strings like "3/12" (track number/total) by taking the first part
    and dates like "2020-05-01" by taking the leading year.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    cleaned = str(value).strip()
    if "/" in cleaned:
        cleaned = cleaned.split("/", 1)[0].strip()
    if len(cleaned) > 4 and cleaned[4] == "-" and cleaned[:4].isdigit():
        cleaned = cleaned[:4]
    try:
        return int(cleaned)
    except ValueError:
        return None
