"""Create-or-update seed records for one table inside a single transaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reseed.domain.errors import RecordNotSavedError
from reseed.domain.model import RunOptions, snapshot_columns

from .constraints import resolve_constraints, validate_candidates
from .matcher import match_record
from .merger import merge_payload
from .reporting import LoggingReporter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reseed.domain.model import ColumnSnapshot, ConstraintSet, SeedPayload
    from reseed.domain.ports import DatabaseGateway, Reporter

log = logging.getLogger(__name__)


class Seeder[TRow]:
    """Reconcile candidate payloads against the rows of ``table``.

    Constraint columns identify a record: a row matching them is updated, otherwise a
    new row is inserted. Constraints default to the primary key. Column metadata is
    read once here and reused for every record of the run, and configuration errors
    (unknown constraint columns, no records) are raised before any write.

    Saving skips domain validation; seed data is authoritative.
    """

    def __init__(
        self,
        gateway: DatabaseGateway[TRow],
        table: str,
        constraints: Iterable[str],
        records: Iterable[SeedPayload],
        *,
        options: RunOptions | None = None,
        quiet_default: bool = False,
        reporter: Reporter | None = None,
    ) -> None:
        self._gateway = gateway
        self.table = table
        run_options = options or RunOptions()
        self.quiet = run_options.resolve_quiet(quiet_default)
        self.insert_only = run_options.insert_only
        self._reporter: Reporter = reporter or LoggingReporter()

        self._columns = snapshot_columns(gateway.list_columns(table))
        self._stamped = frozenset(gateway.timestamp_columns())
        self.constraints: ConstraintSet = resolve_constraints(
            constraints,
            self._columns.keys(),
            primary_key=gateway.primary_key(table),
        )
        self._records = validate_candidates(records)

    @property
    def columns(self) -> ColumnSnapshot:
        return self._columns

    def seed(self) -> list[TRow]:
        """Insert/update all records atomically and return the written rows in order.

        Rows skipped in insert-only mode are not part of the result.
        """

        rows = self._gateway.with_transaction(self._seed_all)
        self._update_id_sequence()
        return rows

    def _seed_all(self) -> list[TRow]:
        rows: list[TRow] = []
        for payload in self._records:
            row = self._seed_record(payload)
            if row is not None:
                rows.append(row)
        return rows

    def _seed_record(self, payload: SeedPayload) -> TRow | None:
        record = match_record(self._gateway, self.table, payload, self.constraints)
        if self.insert_only and not record.is_new:
            return None

        attributes = merge_payload(payload, self._columns, stamped=self._stamped)
        if not self.quiet:
            self._reporter.report(f" - {self.table} {attributes!r}")

        for warning in self._gateway.assign(record.row, attributes):
            self._reporter.warn(str(warning))

        errors = self._gateway.save(record.row, skip_validation=True)
        if errors:
            for message in errors:
                self._reporter.warn(message)
            raise RecordNotSavedError(self.table, errors)
        return record.row

    def _update_id_sequence(self) -> None:
        if not self._gateway.supports_sequence_repair(self.table):
            log.debug(
                "Skipping sequence repair for %s on %s",
                self.table,
                self._gateway.engine_kind(),
            )
            return
        current = self._gateway.current_max_primary_key(self.table)
        next_value = 1 if current is None else current + 1
        self._gateway.reset_sequence(self.table, next_value)
        log.debug("Reset primary key sequence of %s to %s", self.table, next_value)
