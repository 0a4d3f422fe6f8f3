"""CLI output: JSON envelopes or plain human-readable lines."""

from __future__ import annotations

import json
from typing import Iterable

from cantabile import __version__
from cantabile.errors import exit_code_for_exception

SCHEMA_VERSION = "v1"


def _dump(envelope: dict) -> str:
    return json.dumps(envelope, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    if json_output:
        output_sink(
            _dump(
                {
                    "schema_version": SCHEMA_VERSION,
                    "version": __version__,
                    "command": command,
                    "status": "OK",
                    "data": payload,
                }
            )
        )
        return
    for line in human_lines:
        output_sink(line)


def emit_error(
    *,
    command: str,
    exc: BaseException,
    json_output: bool,
    output_sink=print,
) -> int:
    """Report ``exc`` for ``command`` and return its exit code."""
    exit_code = exit_code_for_exception(exc)
    if json_output:
        output_sink(
            _dump(
                {
                    "schema_version": SCHEMA_VERSION,
                    "version": __version__,
                    "command": command,
                    "status": "ERROR",
                    "error": {
                        "type": exc.__class__.__name__,
                        "message": str(exc),
                        "exit_code": exit_code,
                    },
                }
            )
        )
    else:
        output_sink(f"{command}: error={exc}")
    return exit_code
