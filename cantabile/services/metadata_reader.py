"""Read tag fields from audio files using mutagen."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from mutagen import MutagenError
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError
from mutagen.mp4 import MP4, MP4Cover

from ..core.models import Cover, TagFields, parse_int
from ..errors import TagReadError

logger = logging.getLogger(__name__)

_MP4_COVER_MIME = {
    MP4Cover.FORMAT_JPEG: "image/jpeg",
    MP4Cover.FORMAT_PNG: "image/png",
}


class TagReader(Protocol):
    """Anything that can decode TagFields for a path."""

    def read_tags(self, path: Path) -> TagFields:
        ...


class MetadataReader:
    """Decode the tag fields Cantabile needs from FLAC, MP3 and MP4 files."""

    @staticmethod
    def read_tags(path: Path) -> TagFields:
        """Read tag fields from an audio file.

        Args:
            path: Path to audio file

        Returns:
            TagFields populated from the file's tags. Fields the file does not
            carry are left as None.

        Raises:
            TagReadError: the file is missing, unreadable or of an unsupported type
        """
        ext = path.suffix.lower()
        try:
            if ext == '.mp3':
                return MetadataReader._read_mp3(path)
            if ext == '.flac':
                return MetadataReader._read_flac(path)
            if ext in ('.m4a', '.mp4'):
                return MetadataReader._read_mp4(path)
        except (MutagenError, OSError) as exc:
            raise TagReadError(path, str(exc)) from exc
        raise TagReadError(path, f"unsupported file type {ext or '(none)'}")

    @staticmethod
    def _read_mp3(path: Path) -> TagFields:
        """Read ID3 frames from an MP3 file."""
        fields = TagFields()
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            logger.debug("No ID3 header in %s", path)
            return fields

        fields.title = MetadataReader._id3_text(tags, 'TIT2')
        fields.artist = MetadataReader._id3_text(tags, 'TPE1')
        fields.album_artist = MetadataReader._id3_text(tags, 'TPE2')
        fields.album = MetadataReader._id3_text(tags, 'TALB')
        fields.genre = MetadataReader._id3_text(tags, 'TCON')
        fields.year = parse_int(MetadataReader._id3_text(tags, 'TDRC', 'TYER'))
        fields.track_number = parse_int(MetadataReader._id3_text(tags, 'TRCK'))

        pictures = tags.getall('APIC')
        if pictures:
            fields.cover = Cover(data=bytes(pictures[0].data), mime_type=pictures[0].mime)
        return fields

    @staticmethod
    def _read_flac(path: Path) -> TagFields:
        """Read Vorbis comments and pictures from a FLAC file."""
        audio = FLAC(path)
        fields = TagFields(
            title=MetadataReader._get_first(audio, 'TITLE'),
            artist=MetadataReader._get_first(audio, 'ARTIST'),
            album_artist=MetadataReader._get_first(audio, 'ALBUMARTIST', 'ALBUM ARTIST'),
            album=MetadataReader._get_first(audio, 'ALBUM'),
            genre=MetadataReader._get_first(audio, 'GENRE'),
            year=parse_int(MetadataReader._get_first(audio, 'DATE', 'YEAR')),
            track_number=parse_int(MetadataReader._get_first(audio, 'TRACKNUMBER')),
        )
        if audio.pictures:
            picture = audio.pictures[0]
            fields.cover = Cover(data=bytes(picture.data), mime_type=picture.mime)
        return fields

    @staticmethod
    def _read_mp4(path: Path) -> TagFields:
        """Read atoms from an M4A/MP4 file."""
        audio = MP4(path)
        tags = audio.tags or {}
        fields = TagFields(
            title=MetadataReader._mp4_text(tags, '\xa9nam'),
            artist=MetadataReader._mp4_text(tags, '\xa9ART'),
            album_artist=MetadataReader._mp4_text(tags, 'aART'),
            album=MetadataReader._mp4_text(tags, '\xa9alb'),
            genre=MetadataReader._mp4_text(tags, '\xa9gen'),
            year=parse_int(MetadataReader._mp4_text(tags, '\xa9day')),
        )

        # Track number is a (track, total) tuple
        if 'trkn' in tags and tags['trkn']:
            track_tuple = tags['trkn'][0]
            if isinstance(track_tuple, tuple) and len(track_tuple) > 0:
                fields.track_number = track_tuple[0]

        if 'covr' in tags and tags['covr']:
            cover = tags['covr'][0]
            mime = _MP4_COVER_MIME.get(getattr(cover, 'imageformat', None), "image/jpeg")
            fields.cover = Cover(data=bytes(cover), mime_type=mime)
        return fields

    @staticmethod
    def _id3_text(tags: ID3, *frame_ids: str) -> Optional[str]:
        for frame_id in frame_ids:
            frame = tags.get(frame_id)
            if frame is not None and frame.text and str(frame.text[0]):
                return str(frame.text[0])
        return None

    @staticmethod
    def _mp4_text(tags, key: str) -> Optional[str]:
        values = tags.get(key)
        if values and values[0]:
            return str(values[0])
        return None

    @staticmethod
    def _get_first(audio: FLAC, *keys: str) -> Optional[str]:
        """Get first non-empty value from a list of possible keys."""
        for key in keys:
            values = audio.get(key, [])
            if values and values[0]:
                return str(values[0])
        return None
