"""Validation of seeder inputs performed once, before any write happens."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from reseed.domain.errors import EmptySeedSetError, UnknownConstraintColumnError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reseed.domain.model import ConstraintSet, SeedPayload


def resolve_constraints(
    requested: Iterable[str],
    table_columns: Iterable[str],
    *,
    primary_key: str = "id",
) -> ConstraintSet:
    """Return the de-duplicated constraint columns, defaulting to the primary key.

    Raises ``UnknownConstraintColumnError`` listing the offending names together with
    every valid column name of the table.
    """

    constraints = tuple(dict.fromkeys(str(column) for column in requested)) or (primary_key,)
    valid = tuple(table_columns)
    known = set(valid)
    unknown = [column for column in constraints if column not in known]
    if unknown:
        raise UnknownConstraintColumnError(unknown, valid)
    return constraints


def validate_candidates(candidates: Iterable[SeedPayload]) -> tuple[dict[str, object], ...]:
    """Copy candidate payloads with string keys, rejecting an empty seed set."""

    payloads: list[dict[str, object]] = []
    for index, candidate in enumerate(candidates):
        if not isinstance(candidate, Mapping):
            raise TypeError(
                f"Seed record #{index} must be a mapping, got {type(candidate).__name__}"
            )
        payloads.append({str(key): value for key, value in candidate.items()})
    if not payloads:
        raise EmptySeedSetError
    return tuple(payloads)
