"""Seed fixture file adapter."""

from __future__ import annotations

from .loader import (
    SUPPORTED_SUFFIXES,
    discover_fixture_files,
    load_seed_definitions,
    load_seed_file,
)
from .schema import SeedFileModel

__all__ = [
    "SUPPORTED_SUFFIXES",
    "SeedFileModel",
    "discover_fixture_files",
    "load_seed_definitions",
    "load_seed_file",
]
