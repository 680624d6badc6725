"""SQLAlchemy adapter package for reseed."""

from __future__ import annotations

from .engine import build_gateway, create_seed_engine
from .gateway import (
    DEFAULT_TIMESTAMP_COLUMNS,
    GatewayError,
    Scope,
    SeedRow,
    SqlAlchemyGateway,
    Validator,
)

__all__ = [
    "DEFAULT_TIMESTAMP_COLUMNS",
    "GatewayError",
    "Scope",
    "SeedRow",
    "SqlAlchemyGateway",
    "Validator",
    "build_gateway",
    "create_seed_engine",
]
