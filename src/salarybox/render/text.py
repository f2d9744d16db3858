"""Human-readable description of the active analysis mode."""

from __future__ import annotations

from salarybox.config import FilterMode, GroupBy, group_label


def describe_mode(group_by: GroupBy, filter_mode: FilterMode) -> str:
    unit = group_label(group_by).lower()
    text = f"Showing salary box plots by {unit}."
    if filter_mode == "none":
        text += " All data, outliers included."
    elif filter_mode == "group-outliers":
        text += f" Outliers within each {unit} are removed using the interquartile range (IQR)."
    elif filter_mode == "top10":
        text += " The league-wide top 10 salaries are removed before plotting."
    return text
