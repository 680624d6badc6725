"""Seed record reconciliation.

Flow for one ``Seeder.seed`` call:
1) resolve constraint columns and validate records (at construction)
2) per record, in order: match existing row or prepare a new one
3) merge the payload onto known columns with schema defaults
4) assign and save, all inside one transaction
5) after commit, move the primary key sequence past the highest id
"""

from __future__ import annotations

from .constraints import resolve_constraints, validate_candidates
from .matcher import constraint_predicate, match_record
from .merger import merge_payload
from .reporting import PROGRESS_LOGGER, LoggingReporter
from .seeder import Seeder

__all__ = [
    "PROGRESS_LOGGER",
    "LoggingReporter",
    "Seeder",
    "constraint_predicate",
    "match_record",
    "merge_payload",
    "resolve_constraints",
    "validate_candidates",
]
