"""Init and reset commands for the library database."""

from __future__ import annotations

from argparse import Namespace

from cantabile.commands.output import emit_output
from cantabile.errors import ValidationError
from cantabile.infrastructure.database import TABLES, LibraryDatabase


def _counts(database: LibraryDatabase) -> dict[str, int]:
    return {table: database.count(table) for table in TABLES}


def run_init(args: Namespace, *, database: LibraryDatabase | None = None, output_sink=print) -> int:
    """Ensure the Albums and Tracks tables exist."""
    if database is None:
        raise ValidationError("database is required; construct it in the CLI composition root")
    database.initialize()
    counts = _counts(database)
    emit_output(
        command="init",
        payload={"database": str(database.path), "counts": counts},
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(
            f"init: database={database.path}",
            f"init: albums={counts['Albums']} tracks={counts['Tracks']}",
        ),
    )
    return 0


def run_reset(args: Namespace, *, database: LibraryDatabase | None = None, output_sink=print) -> int:
    """Remove every album and track row."""
    if database is None:
        raise ValidationError("database is required; construct it in the CLI composition root")
    database.initialize()
    before = _counts(database)
    database.reset()
    emit_output(
        command="reset",
        payload={"database": str(database.path), "deleted": before},
        json_output=getattr(args, "json", False),
        output_sink=output_sink,
        human_lines=(
            f"reset: database={database.path}",
            f"reset: deleted albums={before['Albums']} tracks={before['Tracks']}",
        ),
    )
    return 0
