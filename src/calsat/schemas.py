"""Pydantic schemas for YAML problem and solution files."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator


class RangeSchema(BaseModel):
    """Schema for the allowed date range (both ends inclusive)."""

    start: date
    end: date


class ProblemSchema(BaseModel):
    """Schema for a problem file."""

    meetings: int | list[str]
    range: RangeSchema
    constraints: list[str] = Field(default_factory=list)

    @field_validator("meetings")
    @classmethod
    def check_meetings(cls, v: int | list[str]) -> int | list[str]:
        """Reject negative counts and duplicate names."""
        if isinstance(v, int):
            if v < 0:
                raise ValueError(f"meetings must be >= 0, got {v}")
            return v
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate meeting names: {', '.join(duplicates)}")
        return v

    @field_validator("constraints", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Accept a single constraint string or null."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class SolutionSchema(BaseModel):
    """Schema for a solution file: meeting name to date."""

    solution: dict[str, date]

    @field_validator("solution", mode="before")
    @classmethod
    def coerce_keys(cls, v: Any) -> Any:
        """YAML reads numeric meeting keys as ints; treat them as names."""
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}  # type: ignore[misc]
        return v
