"""DatabaseGateway implementation backed by SQLAlchemy Core."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import (
    ColumnDefault,
    DefaultClause,
    MetaData,
    Table,
    func,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.exc import DBAPIError, NoSuchTableError

from reseed.domain.errors import UnknownAttributeWarning
from reseed.domain.model import DEFAULT_TIMESTAMP_COLUMNS, ColumnMeta

if TYPE_CHECKING:
    from sqlalchemy import Column, ColumnElement
    from sqlalchemy.engine import Connection, Engine

log = logging.getLogger(__name__)

_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^-?\d+(\.\d+)?$")

type Scope = Callable[[Table], ColumnElement[bool]]
type Validator = Callable[["SeedRow"], Iterable[str]]


class GatewayError(RuntimeError):
    """Raised when the gateway is used incorrectly or a table cannot be found."""


@dataclass(slots=True, eq=False)
class SeedRow:
    """Row handle used by the SQLAlchemy gateway.

    ``identity`` holds the primary key values the row was loaded (or inserted) with;
    it is ``None`` until the row has been persisted.
    """

    table: str
    values: dict[str, Any] = field(default_factory=dict[str, Any])
    identity: dict[str, Any] | None = None
    changed: set[str] = field(default_factory=set[str])

    @property
    def is_new(self) -> bool:
        return self.identity is None

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _parse_server_default(raw: str) -> object | None:
    """Turn reflected default SQL such as ``'active'::character varying`` into a value.

    Expressions (``now()``, ``nextval(...)``) have no literal value and yield ``None``.
    """

    value = raw.strip()
    while value.startswith("(") and value.endswith(")"):
        value = value[1:-1].strip()
    if "::" in value:
        value = value.split("::", 1)[0].strip()
    if len(value) >= 2 and value[0] == value[-1] == "'":  # noqa: PLR2004
        return value[1:-1].replace("''", "'")
    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if _NUMBER_PATTERN.match(value):
        return float(value) if "." in value else int(value)
    return None


def _python_type(column: Column[Any]) -> type | None:
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def _declared_literal(column: Column[Any], literal: str) -> object:
    """Convert a declared ``server_default="0"`` string to the column's Python type."""

    python_type = _python_type(column)
    if python_type is None or python_type is str:
        return literal
    parsed = _parse_server_default(literal)
    if parsed is None:
        return literal
    if python_type is bool and isinstance(parsed, int):
        return bool(parsed)
    return parsed


def _column_default(column: Column[Any]) -> object | None:
    default = column.default
    if isinstance(default, ColumnDefault) and default.is_scalar:
        return default.arg
    server_default = column.server_default
    if isinstance(server_default, DefaultClause):
        arg = server_default.arg
        if isinstance(arg, str):
            return _declared_literal(column, arg)
        raw = getattr(arg, "text", None)
        if isinstance(raw, str):
            return _parse_server_default(raw)
    return None


def _type_name(column: Column[Any]) -> str:
    return str(getattr(column.type, "__visit_name__", type(column.type).__name__)).lower()


class SqlAlchemyGateway:
    """Seed rows through one SQLAlchemy engine.

    Tables are reflected lazily unless already present in ``metadata``. ``scopes``
    are default row filters per table that apply to scoped lookups only, and
    ``validators`` run on save unless validation is skipped.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        metadata: MetaData | None = None,
        scopes: Mapping[str, Iterable[Scope]] | None = None,
        validators: Mapping[str, Iterable[Validator]] | None = None,
        timestamp_columns: tuple[str, str] = DEFAULT_TIMESTAMP_COLUMNS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.engine = engine
        self.metadata = metadata if metadata is not None else MetaData()
        self._scopes = {name: tuple(items) for name, items in (scopes or {}).items()}
        self._validators = {name: tuple(items) for name, items in (validators or {}).items()}
        self._created_column, self._updated_column = timestamp_columns
        self._clock = clock
        self._connection: Connection | None = None

    # -- schema ---------------------------------------------------------------

    def table(self, name: str) -> Table:
        existing = self.metadata.tables.get(name)
        if existing is not None:
            return existing
        try:
            return Table(name, self.metadata, autoload_with=self._connection or self.engine)
        except NoSuchTableError as exc:
            raise GatewayError(f"Unknown table: {name}") from exc

    def list_columns(self, table: str) -> list[ColumnMeta]:
        return [
            ColumnMeta(
                name=column.name,
                nullable=bool(column.nullable),
                type=_type_name(column),
                default=_column_default(column),
            )
            for column in self.table(table).columns
        ]

    def primary_key(self, table: str) -> str:
        # composite keys fall back to their first column
        columns = list(self.table(table).primary_key.columns)
        return columns[0].name if columns else "id"

    def timestamp_columns(self) -> tuple[str, ...]:
        return (self._created_column, self._updated_column)

    # -- rows -----------------------------------------------------------------

    def find_one(
        self,
        table: str,
        predicate: Mapping[str, object],
        *,
        unscoped: bool = True,
    ) -> SeedRow | None:
        target = self.table(table)
        clauses: list[ColumnElement[bool]] = [
            target.c[name].is_(None) if value is None else target.c[name] == value
            for name, value in predicate.items()
        ]
        if not unscoped:
            clauses.extend(scope(target) for scope in self._scopes.get(table, ()))
        # first by primary key, so repeated runs pick the same row among duplicates
        stmt = select(target).where(*clauses).order_by(*target.primary_key.columns).limit(1)
        found = self._require_connection().execute(stmt).mappings().first()
        if found is None:
            return None
        values = dict(found)
        return SeedRow(table=table, values=values, identity=self._identity(target, values))

    def new_empty_row(self, table: str) -> SeedRow:
        self.table(table)
        return SeedRow(table=table)

    def assign(
        self, row: SeedRow, attributes: Mapping[str, object]
    ) -> list[UnknownAttributeWarning]:
        target = self.table(row.table)
        warnings: list[UnknownAttributeWarning] = []
        for key, value in attributes.items():
            if key not in target.c:
                warnings.append(UnknownAttributeWarning(row.table, key))
                continue
            if row.is_new or key not in row.values or row.values[key] != value:
                row.changed.add(key)
            row.values[key] = value
        return warnings

    def save(self, row: SeedRow, *, skip_validation: bool = True) -> list[str]:
        if not skip_validation:
            errors = [
                message
                for validator in self._validators.get(row.table, ())
                for message in validator(row)
            ]
            if errors:
                return errors

        if not row.is_new and not row.changed:
            return []

        target = self.table(row.table)
        connection = self._require_connection()
        self._stamp(target, row)
        try:
            if row.is_new:
                identity = self._insert(connection, target, row)
            else:
                identity = self._update(connection, target, row)
        except DBAPIError as exc:
            log.debug("Write to %s failed", row.table, exc_info=True)
            return [str(exc.orig)]

        refreshed = (
            connection.execute(select(target).where(*self._identity_clauses(target, identity)))
            .mappings()
            .first()
        )
        if refreshed is not None:
            row.values = dict(refreshed)
        row.identity = identity
        row.changed.clear()
        return []

    def _insert(self, connection: Connection, target: Table, row: SeedRow) -> dict[str, Any]:
        key_names = {column.name for column in target.primary_key.columns}
        values = {
            key: value
            for key, value in row.values.items()
            if not (value is None and key in key_names)
        }
        stmt = insert(target)
        if values:
            stmt = stmt.values(values)
        result = connection.execute(stmt)
        if not key_names:
            return self._identity(target, row.values)
        inserted = result.inserted_primary_key
        if inserted is None:
            return {name: values.get(name) for name in key_names}
        return {
            column.name: inserted[index]
            for index, column in enumerate(target.primary_key.columns)
        }

    def _update(self, connection: Connection, target: Table, row: SeedRow) -> dict[str, Any]:
        identity = row.identity or {}
        values = {key: row.values[key] for key in row.changed}
        connection.execute(
            update(target).where(*self._identity_clauses(target, identity)).values(values)
        )
        return {name: row.values.get(name, old) for name, old in identity.items()}

    def _stamp(self, target: Table, row: SeedRow) -> None:
        now = self._clock()
        if row.is_new and self._created_column in target.c:
            if row.values.get(self._created_column) is None:
                row.values[self._created_column] = now
                row.changed.add(self._created_column)
        if self._updated_column in target.c:
            row.values[self._updated_column] = now
            row.changed.add(self._updated_column)

    @staticmethod
    def _identity(target: Table, values: Mapping[str, Any]) -> dict[str, Any]:
        # keyless tables are identified by every column value
        if len(target.primary_key.columns) == 0:
            return {column.name: values.get(column.name) for column in target.columns}
        return {column.name: values.get(column.name) for column in target.primary_key.columns}

    @staticmethod
    def _identity_clauses(
        target: Table, identity: Mapping[str, Any]
    ) -> list[ColumnElement[bool]]:
        return [target.c[name] == value for name, value in identity.items()]

    # -- transactions ---------------------------------------------------------

    def with_transaction[TResult](self, fn: Callable[[], TResult]) -> TResult:
        if self._connection is not None:
            raise GatewayError("A seeding transaction is already open on this gateway")
        with self.engine.begin() as connection:
            self._connection = connection
            try:
                return fn()
            finally:
                self._connection = None

    def _require_connection(self) -> Connection:
        if self._connection is None:
            raise GatewayError("Row operations require an open transaction (use with_transaction)")
        return self._connection

    # -- sequences ------------------------------------------------------------

    def engine_kind(self) -> str:
        return self.engine.dialect.name

    def supports_sequence_repair(self, table: str) -> bool:
        if self.engine_kind() != "postgresql":
            return False
        if len(self.table(table).primary_key.columns) == 0:
            return False
        return self._sequence_name(table) is not None

    def current_max_primary_key(self, table: str) -> int | None:
        target = self.table(table)
        key_column = target.c[self.primary_key(table)]
        with self.engine.connect() as connection:
            value = connection.execute(select(func.max(key_column))).scalar_one_or_none()
        return None if value is None else int(value)

    def reset_sequence(self, table: str, value: int) -> None:
        sequence = self._sequence_name(table)
        if sequence is None:
            raise GatewayError(f"Table {table} has no primary key sequence")
        with self.engine.begin() as connection:
            connection.execute(
                text("SELECT pg_catalog.setval(:sequence, :value, false)"),
                {"sequence": sequence, "value": value},
            )

    def _regclass_name(self, table: str) -> str:
        # parsed as SQL by pg_get_serial_sequence, so it must be quoted like an identifier
        return self.engine.dialect.identifier_preparer.format_table(self.table(table))

    def _sequence_name(self, table: str) -> str | None:
        with self.engine.connect() as connection:
            return connection.execute(
                text("SELECT pg_catalog.pg_get_serial_sequence(:table, :column)"),
                {"table": self._regclass_name(table), "column": self.primary_key(table)},
            ).scalar_one_or_none()

