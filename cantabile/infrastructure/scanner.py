"""Filesystem scanner for audio files."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterator
from pathlib import Path

from cantabile.errors import DirectoryMissing, DirectoryReadError


class LibraryScanner:
    """Walks library roots depth-first and yields audio file paths.

    Entries are visited in sorted order. Symlinks are not followed. Any entry
    that cannot be read aborts the whole walk with DirectoryReadError.
    """

    DEFAULT_EXTENSIONS = {".flac", ".mp3"}

    def __init__(
        self,
        roots: list[Path],
        extensions: set[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            roots: List of root directories to scan
            extensions: Set of file extensions to include (default: .flac, .mp3)
            exclude_patterns: List of fnmatch patterns to exclude
        """
        self.roots = roots
        self.extensions = {ext.lower() for ext in (extensions or self.DEFAULT_EXTENSIONS)}
        self.exclude_patterns = exclude_patterns or []

    def iter_files(self) -> Iterator[Path]:
        """Yield audio files under every root, in depth-first order."""
        for root in self.roots:
            if not root.is_dir():
                raise DirectoryMissing(root)
            yield from self._walk(root)

    def collect(self) -> list[Path]:
        return list(self.iter_files())

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            raise DirectoryReadError(directory, exc) from exc

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_symlink():
                    continue
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as exc:
                raise DirectoryReadError(path, exc) from exc
            if is_dir:
                yield from self._walk(path)
            elif self._should_include(path):
                yield path

    def _should_include(self, path: Path) -> bool:
        """Check if file should be included based on extension and exclude patterns."""
        if path.suffix.lower() not in self.extensions:
            return False

        rel = str(path)
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(rel, pattern):
                return False

        return True
