"""Discover and parse seed fixture files (JSON or TOML)."""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError

from reseed.domain.errors import FixtureError
from reseed.domain.model import SeedDefinition

from .schema import SeedFileModel

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)

SUPPORTED_SUFFIXES: Final[frozenset[str]] = frozenset({".json", ".toml"})


def discover_fixture_files(
    paths: Iterable[Path | str],
    filter_pattern: str | None = None,
) -> list[Path]:
    """List fixture files per directory (sorted by name), keeping directory order.

    ``filter_pattern`` is searched in each file's stem.
    """

    matcher = re.compile(filter_pattern) if filter_pattern else None
    files: list[Path] = []
    for raw_path in paths:
        directory = Path(raw_path)
        if not directory.is_dir():
            log.debug("Fixture directory %s does not exist, skipping", directory)
            continue
        for candidate in sorted(directory.iterdir(), key=lambda item: item.name):
            if not candidate.is_file() or candidate.suffix.lower() not in SUPPORTED_SUFFIXES:
                continue
            if matcher is not None and matcher.search(candidate.stem) is None:
                continue
            files.append(candidate)
    return files


def _read_document(path: Path) -> Any:
    if path.suffix.lower() == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def load_seed_file(path: Path) -> SeedDefinition:
    try:
        document = _read_document(path)
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise FixtureError(path, str(exc)) from exc

    try:
        model = SeedFileModel.model_validate(document)
    except ValidationError as exc:
        raise FixtureError(path, str(exc)) from exc

    return SeedDefinition(
        table=model.table,
        records=tuple(model.records),
        constraints=tuple(model.constraints),
        insert_only=model.insert_only,
        source=path,
    )


def load_seed_definitions(
    paths: Iterable[Path | str],
    filter_pattern: str | None = None,
) -> list[SeedDefinition]:
    return [load_seed_file(path) for path in discover_fixture_files(paths, filter_pattern)]
