"""Group salaries, trim outliers and pick top earners for box plots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple

from salarybox.analysis.stats import iqr_bounds, median
from salarybox.config.controls import (
    MIN_GROUP_SIZE_FOR_OUTLIERS,
    TOP_EARNER_LIMIT,
    FilterMode,
    GroupBy,
    validate_filter,
    validate_group_by,
)
from salarybox.ingest.normalizer import cell_text, is_blank_key, parse_salary
from salarybox.models import ColumnBinding, Distribution, HighlightEntry
from salarybox.session import DatasetSession


logger = logging.getLogger(__name__)

AnalysisStatus = Literal["ok", "empty", "not_loaded"]


@dataclass(frozen=True)
class RankedSalary:
    """A record index paired with its parsed salary."""

    index: int
    salary: float


@dataclass(frozen=True)
class AnalysisResult:
    """Distributions and highlight rows for one (group_by, filter) view."""

    status: AnalysisStatus
    group_by: GroupBy
    filter_mode: FilterMode
    distributions: Tuple[Distribution, ...] = ()
    highlights: Tuple[HighlightEntry, ...] = ()
    dropped_rows: int = 0

    @property
    def is_empty(self) -> bool:
        return self.status != "ok"

    @property
    def value_count(self) -> int:
        return sum(distribution.count for distribution in self.distributions)


def _group_field(binding: ColumnBinding, group_by: GroupBy) -> str:
    return binding.field_for(group_by)


def select_top_earners(
    records: Sequence[Mapping[str, Any]],
    binding: ColumnBinding,
    limit: int = TOP_EARNER_LIMIT,
) -> List[RankedSalary]:
    """Highest salaries league-wide, ties kept in original record order.

    Selection only looks at the salary column so it is the same whichever
    grouping is displayed.
    """

    ranked: List[RankedSalary] = []
    for idx, record in enumerate(records):
        salary = parse_salary(record.get(binding.salary))
        if salary is not None:
            ranked.append(RankedSalary(index=idx, salary=salary))
    ranked.sort(key=lambda item: (-item.salary, item.index))
    return ranked[: max(0, limit)]


def group_salaries(
    records: Sequence[Mapping[str, Any]],
    binding: ColumnBinding,
    group_by: GroupBy,
    *,
    excluded: Iterable[int] = (),
) -> Tuple[Dict[str, List[RankedSalary]], int]:
    """Partition salaries by group label in record order.

    Keys that render to the same label (a numeric 1 and the text "1") share
    one group.

    Returns the groups and the number of rows dropped because the group key
    was blank or the salary did not parse. Excluded indices are not counted
    as dropped.
    """

    group_field = _group_field(binding, group_by)
    skip = set(excluded)
    groups: Dict[str, List[RankedSalary]] = {}
    dropped = 0
    for idx, record in enumerate(records):
        key = record.get(group_field)
        salary = parse_salary(record.get(binding.salary))
        if is_blank_key(key) or salary is None:
            dropped += 1
            logger.debug(
                "Skipping row %d (%s=%r, %s=%r)",
                idx,
                group_field,
                key,
                binding.salary,
                record.get(binding.salary),
            )
            continue
        if idx in skip:
            continue
        groups.setdefault(cell_text(key), []).append(RankedSalary(index=idx, salary=salary))
    return groups, dropped


def filter_group_outliers(sorted_values: Sequence[float]) -> List[float]:
    """Keep values inside the inclusive IQR fences; small groups pass as-is."""

    if len(sorted_values) < MIN_GROUP_SIZE_FOR_OUTLIERS:
        return list(sorted_values)
    lower, upper = iqr_bounds(sorted_values)
    return [value for value in sorted_values if lower <= value <= upper]


def build_distributions(
    groups: Mapping[str, Sequence[RankedSalary]],
    *,
    filter_mode: FilterMode,
) -> List[Distribution]:
    distributions: List[Distribution] = []
    for label, members in groups.items():
        values = sorted(member.salary for member in members)
        if filter_mode == "group-outliers":
            values = filter_group_outliers(values)
        if not values:
            continue
        distributions.append(
            Distribution(label=label, values=values, median=median(values))
        )
    # Equal medians fall back to the group label so the order is stable.
    distributions.sort(key=lambda item: item.label)
    distributions.sort(key=lambda item: item.median, reverse=True)
    return distributions


def _entry_fields(record: Mapping[str, Any], binding: ColumnBinding) -> dict[str, str]:
    return {
        "name": cell_text(record.get(binding.name)) if binding.name else "",
        "team": cell_text(record.get(binding.field_for("team"))),
        "position": cell_text(record.get(binding.field_for("position"))),
    }


def find_group_outliers(
    records: Sequence[Mapping[str, Any]],
    binding: ColumnBinding,
    group_by: GroupBy,
) -> List[HighlightEntry]:
    """Players outside their own group's IQR fences.

    Groups are visited in first-appearance order and players in record order.
    """

    groups, _ = group_salaries(records, binding, group_by)
    entries: List[HighlightEntry] = []
    for label, members in groups.items():
        if len(members) < MIN_GROUP_SIZE_FOR_OUTLIERS:
            continue
        lower, upper = iqr_bounds(sorted(member.salary for member in members))
        for member in members:
            if lower <= member.salary <= upper:
                continue
            entries.append(
                HighlightEntry(
                    kind="outlier",
                    group_label=label,
                    salary=member.salary,
                    **_entry_fields(records[member.index], binding),
                )
            )
    return entries


def top_earner_entries(
    records: Sequence[Mapping[str, Any]],
    binding: ColumnBinding,
    ranked: Sequence[RankedSalary],
) -> List[HighlightEntry]:
    return [
        HighlightEntry(
            kind="top",
            rank=position,
            salary=item.salary,
            **_entry_fields(records[item.index], binding),
        )
        for position, item in enumerate(ranked, start=1)
    ]


def analyze(
    session: Optional[DatasetSession],
    *,
    group_by: str = "team",
    filter_mode: str = "none",
    top_n: int = TOP_EARNER_LIMIT,
) -> AnalysisResult:
    """Run the full grouping pipeline for one view of ``session``.

    Data problems never raise: unparseable rows are dropped and an empty
    outcome is reported through ``status``.
    """

    group_by = validate_group_by(group_by)
    filter_mode = validate_filter(filter_mode)
    if session is None or not session.records:
        return AnalysisResult(status="not_loaded", group_by=group_by, filter_mode=filter_mode)

    records = session.records
    binding = session.binding

    top_earners: List[RankedSalary] = []
    if filter_mode == "top10":
        top_earners = select_top_earners(records, binding, top_n)

    groups, dropped = group_salaries(
        records,
        binding,
        group_by,
        excluded=(item.index for item in top_earners),
    )
    distributions = build_distributions(groups, filter_mode=filter_mode)
    logger.debug(
        "Grouped %d records into %d groups (%d kept after filtering)",
        len(records),
        len(groups),
        len(distributions),
    )

    highlights: List[HighlightEntry] = []
    if filter_mode == "group-outliers":
        highlights = find_group_outliers(records, binding, group_by)
    elif filter_mode == "top10":
        highlights = top_earner_entries(records, binding, top_earners)

    return AnalysisResult(
        status="ok" if distributions else "empty",
        group_by=group_by,
        filter_mode=filter_mode,
        distributions=tuple(distributions),
        highlights=tuple(highlights),
        dropped_rows=dropped,
    )


__all__ = [
    "AnalysisResult",
    "AnalysisStatus",
    "RankedSalary",
    "analyze",
    "build_distributions",
    "filter_group_outliers",
    "find_group_outliers",
    "group_salaries",
    "select_top_earners",
    "top_earner_entries",
]
