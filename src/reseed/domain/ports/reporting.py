"""Reporting sink for seeding progress."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Fire-and-forget sink for operator-facing progress and warning lines."""

    def report(self, line: str) -> None: ...

    def warn(self, line: str) -> None: ...
