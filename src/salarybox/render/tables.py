"""Text tables for the row preview and the highlight list."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from io import StringIO
from typing import List, Optional

from salarybox.analysis import AnalysisResult
from salarybox.config import GroupBy, FilterMode, group_label
from salarybox.ingest import cell_text
from salarybox.session import DatasetSession


NO_DATA_NOTE = "No data loaded."
NO_MATCHES_NOTE = "No matching players."
SALARY_HEADER = "Salary"


@dataclass(frozen=True)
class TableView:
    """Ordered headers and rows of cell text."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


def preview_table(session: Optional[DatasetSession]) -> TableView:
    """Every loaded row, with the first record's keys as columns."""

    if session is None or not session.records:
        return TableView(note=NO_DATA_NOTE)
    columns = list(session.fields)
    rows = [[cell_text(record.get(col)) for col in columns] for record in session.records]
    return TableView(headers=columns, rows=rows)


def highlight_note(group_by: GroupBy, filter_mode: FilterMode) -> str:
    unit = group_label(group_by).lower()
    if filter_mode == "group-outliers":
        return f"Players flagged as IQR outliers within their {unit}."
    if filter_mode == "top10":
        return "The league-wide top 10 salaries."
    return (
        "The outlier list appears when excluding outliers within each group "
        "or excluding the top 10 salaries."
    )


def highlight_table(result: AnalysisResult) -> TableView:
    if result.status == "not_loaded":
        return TableView(note=NO_DATA_NOTE)
    note = highlight_note(result.group_by, result.filter_mode)
    if result.filter_mode == "none":
        return TableView(note=note)

    if result.filter_mode == "top10":
        headers = ["Rank", "Player", "Team", "Position", SALARY_HEADER]
    else:
        headers = [group_label(result.group_by), "Player", "Team", "Position", SALARY_HEADER]

    rows: List[List[str]] = []
    for entry in result.highlights:
        lead = str(entry.rank) if entry.kind == "top" else (entry.group_label or "")
        rows.append([lead, entry.name, entry.team, entry.position, cell_text(entry.salary)])
    if not rows:
        note = f"{note} {NO_MATCHES_NOTE}"
    return TableView(headers=headers, rows=rows, note=note)


def table_to_csv(table: TableView) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(table.headers)
    writer.writerows(table.rows)
    return buffer.getvalue()


__all__ = [
    "NO_DATA_NOTE",
    "NO_MATCHES_NOTE",
    "TableView",
    "highlight_note",
    "highlight_table",
    "preview_table",
    "table_to_csv",
]
