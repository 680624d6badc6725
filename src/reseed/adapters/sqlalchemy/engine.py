"""Engine construction for the SQLAlchemy gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from reseed.config import get_database_config

from .gateway import SqlAlchemyGateway

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def create_seed_engine(database_uri: str | None = None) -> Engine:
    """Create an engine for ``database_uri`` or the configured database."""

    return create_engine(database_uri or get_database_config().uri, future=True)


def build_gateway(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
) -> SqlAlchemyGateway:
    return SqlAlchemyGateway(engine or create_seed_engine(database_uri))
