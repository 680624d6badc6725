"""Project a candidate payload onto the writable columns of the table."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection

    from reseed.domain.model import ColumnSnapshot, SeedPayload


def merge_payload(
    payload: SeedPayload,
    columns: ColumnSnapshot,
    *,
    stamped: Collection[str] = (),
) -> dict[str, object]:
    """Return the attributes to assign for ``payload``.

    Keys that are not columns of the table are dropped silently so seed files can be
    shared between slightly different schema versions, and so are the ``stamped``
    columns the write path fills in itself. Explicit ``None`` values are replaced by
    the column's schema default (which may itself be ``None``).
    """

    attributes: dict[str, object] = {}
    for key, value in payload.items():
        column = columns.get(key)
        if column is None or column.name in stamped:
            continue
        attributes[key] = column.default if value is None else value
    return attributes
