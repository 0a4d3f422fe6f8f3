"""Application settings: library roots, database location, service credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any, Optional

from .errors import ValidationError


@dataclass(frozen=True)
class SpotifySecrets:
    """Credentials for the remote catalogue. Carried as data only."""

    client_id: str = ""
    access_token: str = ""


@dataclass(frozen=True)
class Settings:
    library_paths: tuple[Path, ...] = ()
    database_path: Optional[Path] = None
    spotify: SpotifySecrets = field(default_factory=SpotifySecrets)


def load_settings(path: Optional[Path]) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (CANTABILE_LIBRARY_PATHS, CANTABILE_DB_PATH)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only

    Returns:
        Settings object with resolved values

    Raises:
        ValidationError: the config file is not valid JSON or has bad values
    """
    json_settings: dict[str, Any] = {}
    if path and path.exists():
        try:
            json_settings = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid settings file {path}: {exc}") from exc
        if not isinstance(json_settings, dict):
            raise ValidationError(f"Invalid settings file {path}: expected a JSON object")

    env_paths = os.getenv("CANTABILE_LIBRARY_PATHS")
    if env_paths:
        raw_paths: Any = [item for item in env_paths.split(os.pathsep) if item]
    else:
        raw_paths = json_settings.get("library_paths", [])
    if not isinstance(raw_paths, list) or not all(isinstance(item, str) for item in raw_paths):
        raise ValidationError("library_paths must be a list of strings")

    raw_db = os.getenv("CANTABILE_DB_PATH") or json_settings.get("database_path")
    if raw_db is not None and not isinstance(raw_db, str):
        raise ValidationError("database_path must be a string")

    spotify = json_settings.get("spotify") or {}
    if not isinstance(spotify, dict):
        raise ValidationError("spotify must be an object")

    return Settings(
        library_paths=tuple(Path(item).expanduser() for item in raw_paths),
        database_path=Path(raw_db).expanduser() if raw_db else None,
        spotify=SpotifySecrets(
            client_id=str(spotify.get("client_id", "")),
            access_token=str(spotify.get("access_token", "")),
        ),
    )


def default_config_path() -> Path:
    return Path.home() / ".config" / "cantabile" / "settings.json"
