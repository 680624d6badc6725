from __future__ import annotations

import pytest

from reseed.domain.errors import EmptySeedSetError, UnknownConstraintColumnError
from reseed.domain.seeding import resolve_constraints, validate_candidates

COLUMNS = ("id", "code", "name")


def test_resolve_constraints_defaults_to_primary_key() -> None:
    assert resolve_constraints([], COLUMNS) == ("id",)
    assert resolve_constraints((), ("uuid", "code"), primary_key="uuid") == ("uuid",)


def test_resolve_constraints_deduplicates_preserving_order() -> None:
    assert resolve_constraints(["name", "code", "name"], COLUMNS) == ("name", "code")


def test_resolve_constraints_lists_unknown_and_valid_columns() -> None:
    with pytest.raises(UnknownConstraintColumnError) as exc:
        resolve_constraints(["code", "iso", "region"], COLUMNS)

    assert exc.value.unknown == ("iso", "region")
    assert exc.value.valid == COLUMNS
    assert str(exc.value) == (
        "Your seed constraints contained unknown columns: `iso`, `region`. "
        "Valid columns are: `id`, `code`, `name`."
    )


def test_resolve_constraints_validates_primary_key_default() -> None:
    with pytest.raises(UnknownConstraintColumnError):
        resolve_constraints([], ("code", "name"))


def test_unknown_constraint_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="unknown columns"):
        resolve_constraints(["nope"], COLUMNS)


def test_validate_candidates_rejects_empty_seed_set() -> None:
    with pytest.raises(EmptySeedSetError, match="Seed data missing"):
        validate_candidates([])


def test_validate_candidates_copies_payloads_with_string_keys() -> None:
    original = {"code": "US"}

    payloads = validate_candidates([original])

    assert payloads == ({"code": "US"},)
    payloads[0]["code"] = "CA"
    assert original == {"code": "US"}


def test_validate_candidates_rejects_non_mapping_records() -> None:
    with pytest.raises(TypeError, match="#1"):
        validate_candidates([{"code": "US"}, ["code", "CA"]])  # type: ignore[list-item]
