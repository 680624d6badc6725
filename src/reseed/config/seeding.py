"""Process-wide seeding defaults."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .env import env_flag, env_text
from .errors import ConfigurationError

DEFAULT_FIXTURE_PATH: Final[Path] = Path("db") / "fixtures"


@dataclass(frozen=True, slots=True)
class SeedingConfig:
    quiet: bool = False
    fixture_paths: tuple[Path, ...] = field(default=(DEFAULT_FIXTURE_PATH,))
    filter_pattern: str | None = None


def _fixture_paths_from_env() -> tuple[Path, ...]:
    raw = env_text("RESEED_FIXTURE_PATH")
    if raw is None:
        return (DEFAULT_FIXTURE_PATH,)
    return tuple(Path(part) for part in raw.split(os.pathsep) if part.strip())


def _filter_from_env() -> str | None:
    raw = env_text("RESEED_FILTER")
    if raw is None:
        return None
    try:
        re.compile(raw)
    except re.error as exc:
        problem = f"{raw!r} is not a regular expression ({exc})"
        raise ConfigurationError("RESEED_FILTER", problem) from exc
    return raw


def get_seeding_config() -> SeedingConfig:
    return SeedingConfig(
        quiet=env_flag("RESEED_QUIET"),
        fixture_paths=_fixture_paths_from_env(),
        filter_pattern=_filter_from_env(),
    )
