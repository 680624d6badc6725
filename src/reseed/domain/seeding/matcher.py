"""Find the row a candidate payload refers to, or prepare a new one."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reseed.domain.model import RecordState, ResolvedRecord

if TYPE_CHECKING:
    from reseed.domain.model import ConstraintSet, SeedPayload
    from reseed.domain.ports import DatabaseGateway


def constraint_predicate(payload: SeedPayload, constraints: ConstraintSet) -> dict[str, object]:
    """Equality predicate over the constraint columns; absent values match NULL."""

    return {column: payload.get(column) for column in constraints}


def match_record[TRow](
    gateway: DatabaseGateway[TRow],
    table: str,
    payload: SeedPayload,
    constraints: ConstraintSet,
) -> ResolvedRecord[TRow]:
    row = gateway.find_one(table, constraint_predicate(payload, constraints), unscoped=True)
    if row is None:
        return ResolvedRecord(row=gateway.new_empty_row(table), state=RecordState.NEW)
    return ResolvedRecord(row=row, state=RecordState.EXISTING)
