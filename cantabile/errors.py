"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations

from pathlib import Path


class CantabileError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(CantabileError):
    """Invalid user input or command usage."""

    exit_code = 2


class RuntimeFailure(CantabileError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(CantabileError):
    """Filesystem or I/O failure."""

    exit_code = 3


# Traversal failures


class DirectoryMissing(IOFailure):
    """A library root could not be found."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"The directory {path} couldn't be found! Is the configured library path correct?"
        )


class DirectoryReadError(IOFailure):
    """Listing or inspecting a directory entry failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {path}: {cause}")


class TagReadError(IOFailure):
    """An audio file's tags could not be decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not read tags from {path}: {reason}")


# Storage failures


class StoragePermissionError(IOFailure):
    """The database file exists but cannot be written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Database {path} is not writable; check its permissions")


class StorageUnavailable(IOFailure):
    """The database location cannot be used."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Database {path} is unavailable: {reason}")


# Track construction failures


class TrackError(ValidationError):
    """A file's tags cannot produce a valid track record."""


class MissingTitle(TrackError):
    def __init__(self) -> None:
        super().__init__("Missing title!")


class MissingArtist(TrackError):
    """Either the performer or the album performer tag is absent."""

    def __init__(self, field: str = "artist") -> None:
        self.field = field
        super().__init__(f"Missing artist! (no {field} tag)")


class MissingAlbum(TrackError):
    def __init__(self) -> None:
        super().__init__("Missing album!")


class MissingPosition(TrackError):
    def __init__(self) -> None:
        super().__init__("Missing position!")


class InvalidYear(TrackError):
    """Year does not fit in an unsigned 16-bit integer."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Year is invalid! Got the number {value}.")


class InvalidPosition(TrackError):
    """Track number does not fit in an unsigned 16-bit integer."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"Position is invalid! Got the number {value}.")


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, CantabileError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code
