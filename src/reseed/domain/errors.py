"""Error taxonomy of the seeding engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def column_list(columns: Iterable[str]) -> str:
    return "`" + "`, `".join(columns) + "`"


class SeedError(Exception):
    """Base class for seeding failures."""


class UnknownConstraintColumnError(SeedError, ValueError):
    """Raised when constraint columns do not exist on the target table."""

    def __init__(self, unknown: Iterable[str], valid: Iterable[str]) -> None:
        self.unknown = tuple(unknown)
        self.valid = tuple(valid)
        super().__init__(
            f"Your seed constraints contained unknown columns: {column_list(self.unknown)}. "
            f"Valid columns are: {column_list(self.valid)}."
        )


class EmptySeedSetError(SeedError, ValueError):
    """Raised when a seeder is built without any candidate records."""

    def __init__(self) -> None:
        super().__init__("Seed data missing")


class RecordNotSavedError(SeedError):
    """Raised when the persistence layer refuses to write a seed record."""

    def __init__(self, table: str, errors: Iterable[str]) -> None:
        self.table = table
        self.errors = tuple(errors)
        detail = "; ".join(self.errors) or "no details reported"
        super().__init__(f"Failed to save seed record for {table}: {detail}")


class FixtureError(SeedError):
    """Raised when a seed fixture file cannot be read or is malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid seed fixture {path}: {reason}")


class UnknownAttributeWarning(UserWarning):
    """Attribute rejected by the persistence layer during assignment."""

    def __init__(self, table: str, attribute: str) -> None:
        self.table = table
        self.attribute = attribute
        super().__init__(f"unknown attribute '{attribute}' for {table}.")
