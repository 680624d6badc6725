"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from reseed.adapters.fixtures import load_seed_definitions
from reseed.adapters.sqlalchemy import build_gateway
from reseed.config import get_seeding_config
from reseed.domain.model import RunOptions
from reseed.domain.seeding import Seeder

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from reseed.config import SeedingConfig
    from reseed.domain.model import SeedPayload
    from reseed.domain.ports import DatabaseGateway, Reporter


log = getLogger(__name__)


@dataclass(slots=True)
class SeedRunResult:
    """Counts for one fixture run."""

    files: int = 0
    tables: set[str] = field(default_factory=set[str])
    records: int = 0


def seed[TRow](
    gateway: DatabaseGateway[TRow],
    table: str,
    records: Iterable[SeedPayload],
    *,
    constraints: Iterable[str] = (),
    quiet: bool | None = None,
    insert_only: bool = False,
    reporter: Reporter | None = None,
    config: SeedingConfig | None = None,
) -> list[TRow]:
    """Create or update ``records`` in ``table``, matching on ``constraints``."""

    seeding_config = config or get_seeding_config()
    seeder = Seeder(
        gateway,
        table,
        constraints,
        records,
        options=RunOptions(quiet=quiet, insert_only=insert_only),
        quiet_default=seeding_config.quiet,
        reporter=reporter,
    )
    return seeder.seed()


def seed_once[TRow](
    gateway: DatabaseGateway[TRow],
    table: str,
    records: Iterable[SeedPayload],
    *,
    constraints: Iterable[str] = (),
    quiet: bool | None = None,
    reporter: Reporter | None = None,
    config: SeedingConfig | None = None,
) -> list[TRow]:
    """Create missing ``records`` only; rows that already exist are left untouched."""

    return seed(
        gateway,
        table,
        records,
        constraints=constraints,
        quiet=quiet,
        insert_only=True,
        reporter=reporter,
        config=config,
    )


def seed_fixtures(
    *,
    gateway: DatabaseGateway[Any] | None = None,
    paths: Iterable[Path | str] | None = None,
    filter_pattern: str | None = None,
    quiet: bool | None = None,
    database_uri: str | None = None,
    config: SeedingConfig | None = None,
) -> SeedRunResult:
    """Seed every fixture file found in ``paths``, one transaction per file."""

    seeding_config = config or get_seeding_config()
    fixture_paths = list(paths) if paths is not None else list(seeding_config.fixture_paths)
    effective_filter = filter_pattern or seeding_config.filter_pattern
    definitions = load_seed_definitions(fixture_paths, effective_filter)

    owned_gateway = None
    if gateway is None:
        owned_gateway = build_gateway(database_uri=database_uri)
        gateway = owned_gateway

    log.info(
        "Seeding %s fixture file(s) from %s",
        len(definitions),
        ", ".join(str(path) for path in fixture_paths),
    )
    result = SeedRunResult()
    try:
        for definition in definitions:
            if not (quiet if quiet is not None else seeding_config.quiet):
                log.info("== Seed from %s", definition.source)
            rows = seed(
                gateway,
                definition.table,
                definition.records,
                constraints=definition.constraints,
                quiet=quiet,
                insert_only=definition.insert_only,
                config=seeding_config,
            )
            result.files += 1
            result.tables.add(definition.table)
            result.records += len(rows)
    finally:
        if owned_gateway is not None:
            owned_gateway.engine.dispose()

    return result
