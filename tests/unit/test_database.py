"""Tests for the SQLite library database."""

from __future__ import annotations

import sqlite3
from dataclasses import replace
from pathlib import Path

import pytest

from cantabile.core.builder import build_track
from cantabile.core.models import Cover, TagFields
from cantabile.errors import StoragePermissionError, StorageUnavailable
from cantabile.infrastructure import database as database_module
from cantabile.infrastructure.database import (
    DEFAULT_DATABASE_NAME,
    LibraryDatabase,
    connect,
    resolve_database_path,
)


def _columns(path: Path, table: str) -> list[str]:
    conn = sqlite3.connect(path)
    try:
        return [row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()]
    finally:
        conn.close()


def test_initialize_creates_tables(database: LibraryDatabase) -> None:
    assert _columns(database.path, "Albums") == ["path", "name", "artists", "year", "cover"]
    assert _columns(database.path, "Tracks") == [
        "path",
        "album_path",
        "title",
        "artists",
        "genre",
        "year",
        "position",
    ]


def test_initialize_is_idempotent(database: LibraryDatabase, full_tags: TagFields) -> None:
    database.upsert_track(build_track(Path("/music/a/01.flac"), full_tags))
    database.initialize()
    database.initialize()
    assert database.count("Tracks") == 1


def test_tracks_reference_albums(database: LibraryDatabase) -> None:
    conn = sqlite3.connect(database.path)
    try:
        fks = conn.execute("PRAGMA foreign_key_list(Tracks)").fetchall()
    finally:
        conn.close()
    assert [(fk[2], fk[3], fk[4]) for fk in fks] == [("Albums", "album_path", "path")]


def test_upsert_writes_album_and_track(database: LibraryDatabase, full_tags: TagFields) -> None:
    cover = Cover(data=b"\xff\xd8jpeg", mime_type="image/jpeg")
    track = build_track(Path("/music/gould/01.flac"), replace(full_tags, cover=cover))
    database.upsert_track(track)

    conn = sqlite3.connect(database.path)
    try:
        album = conn.execute("SELECT path, name, artists, year, cover FROM Albums").fetchone()
        row = conn.execute(
            "SELECT path, album_path, title, artists, genre, year, position FROM Tracks"
        ).fetchone()
    finally:
        conn.close()

    assert album == (
        "/music/gould",
        "Goldberg Variations (1981)",
        "Johann Sebastian Bach; Glenn Gould",
        1982,
        b"\xff\xd8jpeg",
    )
    assert row == (
        "/music/gould/01.flac",
        "/music/gould",
        "Goldberg Variations: Aria",
        "Johann Sebastian Bach; Glenn Gould",
        "Classical",
        1982,
        1,
    )


def test_year_2020_is_stored_as_2020(database: LibraryDatabase, full_tags: TagFields) -> None:
    database.upsert_track(build_track(Path("/music/a/01.flac"), replace(full_tags, year=2020)))
    conn = sqlite3.connect(database.path)
    try:
        year = conn.execute("SELECT year FROM Tracks").fetchone()[0]
    finally:
        conn.close()
    assert year == 2020


def test_reindexing_same_path_replaces_row(database: LibraryDatabase, full_tags: TagFields) -> None:
    path = Path("/music/a/01.flac")
    database.upsert_track(build_track(path, full_tags))
    database.upsert_track(build_track(path, replace(full_tags, title="Aria da capo")))

    assert database.count("Tracks") == 1
    assert database.count("Albums") == 1
    conn = sqlite3.connect(database.path)
    try:
        title = conn.execute("SELECT title FROM Tracks").fetchone()[0]
    finally:
        conn.close()
    assert title == "Aria da capo"


def test_reset_empties_both_tables(database: LibraryDatabase, full_tags: TagFields) -> None:
    database.upsert_track(build_track(Path("/music/a/01.flac"), full_tags))
    database.upsert_track(build_track(Path("/music/b/01.flac"), full_tags))
    assert database.count("Albums") == 2

    database.reset()

    assert database.count("Albums") == 0
    assert database.count("Tracks") == 0


def test_count_rejects_unknown_table(database: LibraryDatabase) -> None:
    with pytest.raises(ValueError):
        database.count("sqlite_master")


def test_resolve_defaults_to_working_directory(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert resolve_database_path() == tmp_path / DEFAULT_DATABASE_NAME
    assert resolve_database_path(Path("/data/x.db")) == Path("/data/x.db")


def test_connect_creates_default_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    with connect() as db:
        db.initialize()
    assert (tmp_path / DEFAULT_DATABASE_NAME).exists()


def test_read_only_database_fails_before_connecting(tmp_path: Path, monkeypatch) -> None:
    db_path = tmp_path / "library.db"
    db_path.write_bytes(b"")
    connects: list[Path] = []

    monkeypatch.setattr(database_module.os, "access", lambda path, mode: False)
    monkeypatch.setattr(
        database_module.sqlite3, "connect", lambda *args, **kwargs: connects.append(args[0])
    )

    with pytest.raises(StoragePermissionError) as excinfo:
        connect(db_path)

    assert excinfo.value.path == db_path
    assert connects == []


def test_missing_parent_directory_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(StorageUnavailable):
        connect(tmp_path / "missing" / "library.db")


def test_directory_path_is_unavailable(tmp_path: Path) -> None:
    with pytest.raises(StorageUnavailable):
        connect(tmp_path)


def _deny_directory(directory: Path):
    def access(path, mode) -> bool:
        return Path(path) != directory

    return access


def test_new_database_in_read_only_directory_fails(tmp_path: Path, monkeypatch) -> None:
    connects: list[Path] = []
    monkeypatch.setattr(database_module.os, "access", _deny_directory(tmp_path))
    monkeypatch.setattr(
        database_module.sqlite3, "connect", lambda *args, **kwargs: connects.append(args[0])
    )

    with pytest.raises(StoragePermissionError) as excinfo:
        connect(tmp_path / "library.db")

    assert excinfo.value.path == tmp_path / "library.db"
    assert connects == []


def test_existing_database_in_read_only_directory_fails(tmp_path: Path, monkeypatch) -> None:
    db_path = tmp_path / "library.db"
    db_path.write_bytes(b"")
    monkeypatch.setattr(database_module.os, "access", _deny_directory(tmp_path))

    with pytest.raises(StoragePermissionError):
        connect(db_path)
