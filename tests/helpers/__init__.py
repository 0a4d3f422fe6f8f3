"""Test helper utilities."""

from .fs import AudioStubSpec, SidecarTagReader, build_album_dir, create_audio_stub

__all__ = [
    "AudioStubSpec",
    "SidecarTagReader",
    "build_album_dir",
    "create_audio_stub",
]
