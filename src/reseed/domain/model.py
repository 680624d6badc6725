"""Value types shared by the seeding engine and its adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

type ConstraintSet = tuple[str, ...]
type SeedPayload = Mapping[str, object]
type ColumnSnapshot = Mapping[str, ColumnMeta]

# creation and update stamps, written by the persistence layer rather than by seed data
DEFAULT_TIMESTAMP_COLUMNS: Final[tuple[str, str]] = ("created_at", "updated_at")


@dataclass(frozen=True, slots=True)
class ColumnMeta:
    """Schema facts for one column of the target table."""

    name: str
    nullable: bool
    type: str
    default: object | None = None


def snapshot_columns(columns: Iterable[ColumnMeta]) -> ColumnSnapshot:
    """Freeze column metadata into a read-only ``name -> ColumnMeta`` mapping."""

    return MappingProxyType({column.name: column for column in columns})


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Per-run switches.

    ``quiet`` left as ``None`` defers to the process-wide default handed to the seeder.
    """

    quiet: bool | None = None
    insert_only: bool = False

    def resolve_quiet(self, default: bool) -> bool:
        return default if self.quiet is None else self.quiet


class RecordState(StrEnum):
    EXISTING = "existing"
    NEW = "new"


@dataclass(slots=True)
class ResolvedRecord[TRow]:
    """Outcome of matching a candidate payload against the table."""

    row: TRow
    state: RecordState

    @property
    def is_new(self) -> bool:
        return self.state is RecordState.NEW


@dataclass(frozen=True, slots=True)
class SeedDefinition:
    """A declared batch of seed records for one table, e.g. loaded from a fixture file."""

    table: str
    records: tuple[SeedPayload, ...]
    constraints: ConstraintSet = ()
    insert_only: bool = False
    source: Path | None = None
