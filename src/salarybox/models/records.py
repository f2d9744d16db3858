"""Canonical salary models shared across ingestion, analysis and rendering."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from salarybox.config import ROLES


class ColumnBinding(BaseModel):
    """Field names bound to each column role for one loaded dataset."""

    team: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    salary: str = Field(..., min_length=1)
    name: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def field_for(self, role: str) -> Optional[str]:
        if role not in ROLES:
            raise KeyError(f"Unknown column role {role!r}")
        return getattr(self, role)


class Distribution(BaseModel):
    """Sorted salaries for one group, ready for a box trace."""

    label: str
    values: List[float]
    median: float

    model_config = ConfigDict(frozen=True)

    @property
    def count(self) -> int:
        return len(self.values)


class HighlightEntry(BaseModel):
    """A player surfaced in the secondary table."""

    kind: Literal["outlier", "top"]
    group_label: Optional[str] = None
    rank: Optional[int] = Field(default=None, ge=1)
    name: str = ""
    team: str = ""
    position: str = ""
    salary: float

    model_config = ConfigDict(frozen=True)
