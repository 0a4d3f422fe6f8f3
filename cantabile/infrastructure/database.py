"""SQLite index of albums and tracks."""

from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from threading import Lock
from typing import Optional

from cantabile.core.models import Track
from cantabile.errors import StoragePermissionError, StorageUnavailable


DEFAULT_DATABASE_NAME = "cantabile.db"

SCHEMA = """CREATE TABLE IF NOT EXISTS Albums (
    path TEXT PRIMARY KEY,
    name TEXT,
    artists TEXT,
    year INTEGER,
    cover BLOB
);
CREATE TABLE IF NOT EXISTS Tracks (
    path TEXT PRIMARY KEY,
    album_path TEXT REFERENCES Albums (path),
    title TEXT,
    artists TEXT,
    genre TEXT,
    year INTEGER,
    position INTEGER
);
"""

TABLES = ("Albums", "Tracks")


def resolve_database_path(path: Optional[Path] = None) -> Path:
    """Return ``path`` or the default database file under the working directory."""
    if path is not None:
        return Path(path)
    return Path.cwd() / DEFAULT_DATABASE_NAME


def check_writable(path: Path) -> None:
    """Fail fast when the database location cannot be written.

    SQLite creates its journal beside the database file, so the parent
    directory must be writable even when the file itself already exists.

    Raises:
        StoragePermissionError: ``path`` or its parent directory is not writable.
        StorageUnavailable: ``path`` is a directory or its parent is missing.
    """
    if path.exists():
        if path.is_dir():
            raise StorageUnavailable(path, "path is a directory")
        if not os.access(path, os.W_OK):
            raise StoragePermissionError(path)
    elif not path.parent.is_dir():
        raise StorageUnavailable(path, f"parent directory {path.parent} does not exist")
    if not os.access(path.parent, os.W_OK):
        raise StoragePermissionError(path)


class LibraryDatabase:
    """Single-connection SQLite store for indexed tracks."""

    def __init__(self, path: Path) -> None:
        self.path = path
        check_writable(self.path)
        self._lock = Lock()
        self._logger = logging.getLogger(__name__)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._logger.debug("Opened library database %s", self.path)

    def initialize(self) -> None:
        """Create the Albums and Tracks tables if they do not exist."""
        with self._lock:
            self._conn.executescript(SCHEMA)
            self._conn.commit()
        self._logger.debug("Ensured schema in %s", self.path)

    def reset(self) -> None:
        """Delete every row from both tables. Tracks go first so no row is orphaned."""
        with self._lock:
            self._conn.execute("DELETE FROM Tracks")
            self._conn.execute("DELETE FROM Albums")
            self._conn.commit()
        self._logger.info("Cleared all albums and tracks from %s", self.path)

    def upsert_track(self, track: Track) -> None:
        """Store ``track`` and its album, replacing any rows with the same paths."""
        cover = track.album_cover.data if track.album_cover else None
        with self._lock:
            self._conn.execute(
                """
                INSERT OR REPLACE INTO Albums (path, name, artists, year, cover)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    str(track.album_path),
                    track.album_name,
                    track.album_artists.to_text(),
                    track.year,
                    cover,
                ),
            )
            self._conn.execute(
                """
                INSERT OR REPLACE INTO Tracks
                    (path, album_path, title, artists, genre, year, position)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(track.path),
                    str(track.album_path),
                    track.title,
                    track.artists.to_text(),
                    track.genre,
                    track.year,
                    track.position,
                ),
            )
            self._conn.commit()

    def count(self, table: str) -> int:
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        row = self._conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        return int(row[0]) if row else 0

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "LibraryDatabase":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def connect(path: Optional[Path] = None) -> LibraryDatabase:
    """Open the library database at ``path`` (default: ``./cantabile.db``)."""
    return LibraryDatabase(resolve_database_path(path))
