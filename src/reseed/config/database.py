"""Which database a seeding run writes to."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from .env import env_text
from .errors import ConfigurationError

DEFAULT_DB_FILENAME: Final[str] = "reseed.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def default_database_path() -> Path:
    """SQLite file used when ``DATABASE_URI`` is unset, created under the data directory."""

    data_dir = env_text("RESEED_DATA_DIR")
    if data_dir is not None:
        base = Path(data_dir)
    else:
        xdg = os.getenv("XDG_DATA_HOME")
        base = (Path(xdg) if xdg else Path.home() / ".local" / "share") / "reseed"
    base = base.expanduser().resolve()
    base.mkdir(parents=True, exist_ok=True)
    return base / DEFAULT_DB_FILENAME


def get_database_config() -> DatabaseConfig:
    uri = env_text("DATABASE_URI")
    if uri is None:
        return DatabaseConfig(uri=f"sqlite+pysqlite:///{default_database_path()}")
    try:
        make_url(uri)
    except ArgumentError as exc:
        raise ConfigurationError("DATABASE_URI", str(exc)) from exc
    return DatabaseConfig(uri=uri)
