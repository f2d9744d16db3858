"""Salary distribution analysis (grouping, outliers, top earners)."""

from .engine import (
    AnalysisResult,
    AnalysisStatus,
    RankedSalary,
    analyze,
    build_distributions,
    filter_group_outliers,
    find_group_outliers,
    group_salaries,
    select_top_earners,
    top_earner_entries,
)
from .stats import iqr_bounds, median, quantile

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
    "iqr_bounds",
    "median",
    "quantile",
]
