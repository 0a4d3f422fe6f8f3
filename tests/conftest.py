"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generator

import pytest

from cantabile.core.models import TagFields
from cantabile.infrastructure.database import LibraryDatabase
from tests.helpers.fs import AudioStubSpec, SidecarTagReader, build_album_dir


@pytest.fixture
def full_tags() -> TagFields:
    """Tags with every field the builder understands."""
    return TagFields(
        title="Goldberg Variations: Aria",
        artist="Glenn Gould",
        album_artist="Bach; Glenn Gould",
        album="Goldberg Variations (1981)",
        genre="Classical",
        year=1982,
        track_number=1,
    )


@pytest.fixture
def database(tmp_path: Path) -> Generator[LibraryDatabase, None, None]:
    """An initialized library database in a temporary directory."""
    db = LibraryDatabase(tmp_path / "library.db")
    db.initialize()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def sidecar_reader() -> SidecarTagReader:
    return SidecarTagReader()


@pytest.fixture
def test_library(tmp_path: Path) -> Path:
    """Create a temporary library directory."""
    library = tmp_path / "library"
    library.mkdir()
    return library


@pytest.fixture
def album_dir_factory(test_library: Path):
    """Factory for creating album directories of tagged audio stubs."""
    def _create_album(name: str, tracks: list[dict[str, Any]]) -> list[Path]:
        specs = [
            AudioStubSpec(filename=f"{i + 1:02d}.flac", tags=tags)
            for i, tags in enumerate(tracks)
        ]
        return build_album_dir(test_library, name, specs)

    return _create_album
