"""Domain port definitions for adapters."""

from __future__ import annotations

from .gateway import DatabaseGateway
from .reporting import Reporter

__all__ = ["DatabaseGateway", "Reporter"]
