"""Filesystem scaffolding helpers for tests."""

from __future__ import annotations

from dataclasses import dataclass
import base64
import json
from pathlib import Path
from typing import Any

from cantabile.core.models import Cover, TagFields


@dataclass(frozen=True)
class AudioStubSpec:
    """Specification for an audio stub file."""
    filename: str
    tags: dict[str, Any] | None = None


def create_audio_stub(path: Path, spec: AudioStubSpec) -> Path:
    """Create an audio stub with its tags in a ``.meta.json`` sidecar."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * 64)

    metadata_path = path.with_suffix(path.suffix + ".meta.json")
    metadata_path.write_text(json.dumps({"tags": spec.tags or {}}, indent=2))
    return path


def build_album_dir(base_dir: Path, name: str, audio_specs: list[AudioStubSpec]) -> list[Path]:
    """Create an album directory of audio stubs and return their paths."""
    album_dir = base_dir / name
    album_dir.mkdir(parents=True, exist_ok=True)
    return [create_audio_stub(album_dir / spec.filename, spec) for spec in audio_specs]


class SidecarTagReader:
    """Tag reader backed by the ``.meta.json`` sidecars of audio stubs."""

    def read_tags(self, path: Path) -> TagFields:
        metadata_path = path.with_suffix(path.suffix + ".meta.json")
        tags = json.loads(metadata_path.read_text()).get("tags", {})
        cover = None
        if "cover" in tags:
            cover = Cover(
                data=base64.b64decode(tags["cover"]["data"]),
                mime_type=tags["cover"]["mime_type"],
            )
        return TagFields(
            title=tags.get("title"),
            artist=tags.get("artist"),
            album_artist=tags.get("album_artist"),
            album=tags.get("album"),
            genre=tags.get("genre"),
            year=tags.get("year"),
            track_number=tags.get("track_number"),
            cover=cover,
        )
