from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from salarybox.models import ColumnBinding


class ColumnOverridesPayload(BaseModel):
    team: str | None = None
    position: str | None = None
    salary: str | None = None
    name: str | None = None

    def as_mapping(self) -> dict[str, str]:
        return {role: value for role, value in self.model_dump().items() if value}


class DatasetSummaryResponse(BaseModel):
    source_name: str
    row_count: int = Field(..., ge=0)
    fields: list[str]
    binding: ColumnBinding
    loaded_at: datetime


class TableResponse(BaseModel):
    headers: list[str]
    rows: list[list[str]]
    note: str | None = None
