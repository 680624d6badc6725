from __future__ import annotations

from reseed.domain.model import RecordState
from reseed.domain.seeding import constraint_predicate, match_record
from tests.helpers.gateway import FakeGateway


def test_constraint_predicate_uses_only_constraint_columns() -> None:
    predicate = constraint_predicate({"code": "US", "name": "United States"}, ("code",))

    assert predicate == {"code": "US"}


def test_constraint_predicate_matches_missing_values_against_null() -> None:
    assert constraint_predicate({"name": "Nowhere"}, ("code", "name")) == {
        "code": None,
        "name": "Nowhere",
    }


def test_match_record_returns_existing_row() -> None:
    gateway = FakeGateway(rows=[{"id": 1, "code": "US", "name": "United States"}])

    record = gateway.with_transaction(
        lambda: match_record(gateway, "countries", {"code": "US"}, ("code",))
    )

    assert record.state is RecordState.EXISTING
    assert not record.is_new
    assert record.row is gateway.rows[0]


def test_match_record_prepares_new_row_when_nothing_matches() -> None:
    gateway = FakeGateway(rows=[{"id": 1, "code": "US"}])

    record = gateway.with_transaction(
        lambda: match_record(gateway, "countries", {"code": "CA"}, ("code",))
    )

    assert record.is_new
    assert record.row.values == {}
    assert len(gateway.rows) == 1


def test_match_record_looks_up_unscoped() -> None:
    gateway = FakeGateway(rows=[{"id": 1, "code": "US", "hidden": True}])

    record = gateway.with_transaction(
        lambda: match_record(gateway, "countries", {"code": "US"}, ("code",))
    )

    assert not record.is_new
    assert gateway.lookups == [({"code": "US"}, True)]


def test_match_record_rebuilds_predicate_per_payload() -> None:
    gateway = FakeGateway()

    def run() -> None:
        match_record(gateway, "countries", {"code": "US"}, ("code",))
        match_record(gateway, "countries", {"code": "CA"}, ("code",))

    gateway.with_transaction(run)

    assert [predicate for predicate, _ in gateway.lookups] == [{"code": "US"}, {"code": "CA"}]
