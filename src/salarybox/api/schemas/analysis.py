from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from salarybox.models import Distribution, HighlightEntry

from .dataset import TableResponse


class AnalysisResponse(BaseModel):
    status: Literal["ok", "empty", "not_loaded"]
    group_by: Literal["team", "position"]
    filter: Literal["none", "group-outliers", "top10"]
    description: str
    distributions: list[Distribution]
    highlights: list[HighlightEntry]
    highlight_table: TableResponse
    dropped_rows: int = Field(default=0, ge=0)
