"""Index command - read tags from library files and store track records."""

from __future__ import annotations

from argparse import Namespace
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Iterable, Optional

from cantabile.commands.output import emit_error, emit_output
from cantabile.core.builder import build_track
from cantabile.errors import CantabileError, TagReadError, TrackError, ValidationError
from cantabile.infrastructure.database import LibraryDatabase
from cantabile.infrastructure.scanner import LibraryScanner
from cantabile.services.metadata_reader import MetadataReader, TagReader
from cantabile.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    indexed: int = 0
    skipped: int = 0
    errors: list[tuple[Path, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "indexed": self.indexed,
            "skipped": self.skipped,
            "errors": [
                {"path": str(path), "message": message} for path, message in self.errors
            ],
        }


def index_paths(
    paths: Iterable[Path],
    *,
    database: LibraryDatabase,
    reader: TagReader,
    fail_fast: bool = False,
) -> IndexReport:
    """Build and store a track for each path.

    A file whose tags are unreadable or incomplete is skipped and recorded in
    the report, unless ``fail_fast`` is set, in which case its error is raised.
    """
    report = IndexReport()
    for path in paths:
        try:
            track = build_track(path, reader.read_tags(path))
        except (TrackError, TagReadError) as exc:
            if fail_fast:
                raise
            logger.warning("Skipping %s: %s", path, exc)
            report.skipped += 1
            report.errors.append((path, str(exc)))
            continue
        database.upsert_track(track)
        report.indexed += 1
        logger.debug("Indexed %s", path)
    return report


def _resolve_roots(args: Namespace, settings: Optional[Settings]) -> list[Path]:
    roots = [Path(root) for root in (getattr(args, "roots", None) or [])]
    if not roots and settings is not None:
        roots = list(settings.library_paths)
    if not roots:
        raise ValidationError("No library roots given on the command line or in settings")
    return [root.resolve() for root in roots]


def run_index(
    args: Namespace,
    *,
    database: LibraryDatabase | None = None,
    settings: Settings | None = None,
    scanner: LibraryScanner | None = None,
    reader: TagReader | None = None,
    output_sink=print,
) -> int:
    """Walk the library roots and index every audio file found."""
    json_output = getattr(args, "json", False)
    try:
        if database is None:
            raise ValidationError("database is required; construct it in the CLI composition root")
        roots = _resolve_roots(args, settings)
        scanner = scanner or LibraryScanner(roots)
        database.initialize()
        report = index_paths(
            scanner.iter_files(),
            database=database,
            reader=reader or MetadataReader(),
            fail_fast=getattr(args, "fail_fast", False),
        )
    except CantabileError as exc:
        logger.error("Indexing failed: %s", exc)
        return emit_error(
            command="index", exc=exc, json_output=json_output, output_sink=output_sink
        )

    logger.info("Indexed %d file(s), skipped %d", report.indexed, report.skipped)
    payload = {"roots": [str(root) for root in roots], **report.to_dict()}
    emit_output(
        command="index",
        payload=payload,
        json_output=json_output,
        output_sink=output_sink,
        human_lines=(
            *(f"index: root={root}" for root in roots),
            f"index: indexed={report.indexed} skipped={report.skipped}",
            *(f"index: skipped {path}: {message}" for path, message in report.errors),
        ),
    )
    return 0
