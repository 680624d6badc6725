from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import MetaData, create_engine

from reseed.adapters.sqlalchemy import SqlAlchemyGateway
from tests.helpers.schema import FIXED_NOW, build_countries_table

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def clear_seeding_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RESEED_QUIET", "RESEED_FIXTURE_PATH", "RESEED_FILTER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def countries_metadata() -> MetaData:
    metadata = MetaData()
    build_countries_table(metadata)
    return metadata


@pytest.fixture
def sqlite_engine(countries_metadata: MetaData) -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    countries_metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def reflected_gateway(sqlite_engine: Engine) -> SqlAlchemyGateway:
    """Gateway that learns the schema through reflection only."""
    return SqlAlchemyGateway(sqlite_engine, clock=lambda: FIXED_NOW)


@pytest.fixture
def mapped_gateway(sqlite_engine: Engine, countries_metadata: MetaData) -> SqlAlchemyGateway:
    """Gateway sharing the application's MetaData, so Python-side defaults are visible."""
    return SqlAlchemyGateway(sqlite_engine, metadata=countries_metadata, clock=lambda: FIXED_NOW)
