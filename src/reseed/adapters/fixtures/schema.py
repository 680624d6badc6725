"""Pydantic models describing seed fixture documents."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SeedFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    table: str = Field(min_length=1)
    constraints: list[str] = Field(default_factory=list)
    insert_only: bool = False
    records: list[dict[str, Any]]

    @field_validator("table")
    @classmethod
    def _strip_table(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("table must not be blank")
        return stripped
