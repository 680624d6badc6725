from __future__ import annotations

from reseed.domain.model import DEFAULT_TIMESTAMP_COLUMNS, ColumnMeta, snapshot_columns
from reseed.domain.seeding import merge_payload

COLUMNS = snapshot_columns(
    [
        ColumnMeta(name="id", nullable=False, type="integer"),
        ColumnMeta(name="code", nullable=False, type="string"),
        ColumnMeta(name="status", nullable=False, type="string", default="active"),
        ColumnMeta(name="notes", nullable=True, type="text"),
        ColumnMeta(name="created_at", nullable=True, type="datetime"),
        ColumnMeta(name="updated_at", nullable=True, type="datetime"),
    ]
)


def test_merge_keeps_known_columns_in_payload_order() -> None:
    merged = merge_payload({"status": "retired", "code": "US"}, COLUMNS)

    assert list(merged.items()) == [("status", "retired"), ("code", "US")]


def test_merge_replaces_explicit_null_with_schema_default() -> None:
    merged = merge_payload({"code": "US", "status": None}, COLUMNS)

    assert merged["status"] == "active"


def test_merge_keeps_null_when_column_has_no_default() -> None:
    merged = merge_payload({"code": "US", "notes": None}, COLUMNS)

    assert "notes" in merged
    assert merged["notes"] is None


def test_merge_does_not_fill_columns_missing_from_payload() -> None:
    assert merge_payload({"code": "US"}, COLUMNS) == {"code": "US"}


def test_merge_drops_unknown_columns_silently() -> None:
    merged = merge_payload({"code": "US", "continent": "NA"}, COLUMNS)

    assert merged == {"code": "US"}


def test_merge_never_takes_stamped_columns_from_payload() -> None:
    merged = merge_payload(
        {"code": "US", "created_at": "2001-01-01", "updated_at": "2001-01-02"},
        COLUMNS,
        stamped=DEFAULT_TIMESTAMP_COLUMNS,
    )

    assert merged == {"code": "US"}


def test_merge_keeps_timestamp_named_columns_the_gateway_does_not_stamp() -> None:
    merged = merge_payload(
        {"code": "US", "created_at": "2001-01-01", "notes": "seeded"},
        COLUMNS,
        stamped=("notes",),
    )

    assert merged == {"code": "US", "created_at": "2001-01-01"}


def test_merge_keeps_falsy_values() -> None:
    merged = merge_payload({"id": 0, "code": "", "status": False}, COLUMNS)

    assert merged == {"id": 0, "code": "", "status": False}
