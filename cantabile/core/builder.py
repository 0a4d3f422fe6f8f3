"""Build validated track records from decoded tag fields."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import (
    InvalidPosition,
    InvalidYear,
    MissingAlbum,
    MissingArtist,
    MissingPosition,
    MissingTitle,
)
from .artists import classify
from .models import U16_MAX, TagFields, Track


def _present(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def _to_u16(value: int, error: type[InvalidYear] | type[InvalidPosition]) -> int:
    if value < 0 or value > U16_MAX:
        raise error(value)
    return value


def build_track(path: Path, tags: TagFields) -> Track:
    """Validate ``tags`` and assemble the Track for ``path``.

    Required fields are checked in order: title, artist, album artist, album,
    position. The first one missing raises its own error.

    Raises:
        MissingTitle, MissingArtist, MissingAlbum, MissingPosition: a required
            tag is absent or blank.
        InvalidYear, InvalidPosition: a number does not fit in 0..65535.
    """
    title = _present(tags.title)
    if title is None:
        raise MissingTitle()
    artist = _present(tags.artist)
    if artist is None:
        raise MissingArtist("artist")
    album_artist = _present(tags.album_artist)
    if album_artist is None:
        raise MissingArtist("album_artist")
    album = _present(tags.album)
    if album is None:
        raise MissingAlbum()
    if tags.track_number is None:
        raise MissingPosition()
    position = _to_u16(tags.track_number, InvalidPosition)

    year = None
    if tags.year is not None:
        year = _to_u16(tags.year, InvalidYear)

    return Track(
        path=path,
        title=title,
        artists=classify([artist, album_artist]),
        album_name=album,
        album_cover=tags.cover,
        album_artists=classify([album_artist]),
        genre=tags.genre or "",
        year=year,
        position=position,
    )
