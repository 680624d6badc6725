"""Persistence port consumed by the seeding engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from reseed.domain.errors import UnknownAttributeWarning
    from reseed.domain.model import ColumnMeta


@runtime_checkable
class DatabaseGateway[TRow](Protocol):
    """Table-level persistence operations needed to reconcile seed records.

    ``TRow`` is whatever handle the gateway uses for a single row; the engine never
    looks inside it.
    """

    def list_columns(self, table: str) -> Sequence[ColumnMeta]: ...

    def primary_key(self, table: str) -> str: ...

    def timestamp_columns(self) -> Sequence[str]:
        """Columns the gateway stamps itself on save; seed data never sets them."""
        ...

    def find_one(
        self,
        table: str,
        predicate: Mapping[str, object],
        *,
        unscoped: bool = True,
    ) -> TRow | None: ...

    def new_empty_row(self, table: str) -> TRow: ...

    def assign(
        self, row: TRow, attributes: Mapping[str, object]
    ) -> Sequence[UnknownAttributeWarning]: ...

    def save(self, row: TRow, *, skip_validation: bool = True) -> Sequence[str]:
        """Persist ``row``; an empty result means success, otherwise the error messages."""
        ...

    def with_transaction[TResult](self, fn: Callable[[], TResult]) -> TResult: ...

    def engine_kind(self) -> str: ...

    def supports_sequence_repair(self, table: str) -> bool: ...

    def current_max_primary_key(self, table: str) -> int | None: ...

    def reset_sequence(self, table: str, value: int) -> None: ...
