"""Enumerated analysis controls shared by the API, UI and CLI."""

from __future__ import annotations

from typing import Literal, get_args


GroupBy = Literal["team", "position"]
FilterMode = Literal["none", "group-outliers", "top10"]

GROUP_BY_CHOICES: list[tuple[str, str]] = [
    ("team", "Team"),
    ("position", "Position"),
]

FILTER_CHOICES: list[tuple[str, str]] = [
    ("none", "Show all data"),
    ("group-outliers", "Exclude outliers within each group (IQR)"),
    ("top10", "Exclude the league-wide top 10 salaries"),
]

TOP_EARNER_LIMIT = 10
MIN_GROUP_SIZE_FOR_OUTLIERS = 4
IQR_MULTIPLIER = 1.5


def validate_group_by(value: str) -> GroupBy:
    if value not in get_args(GroupBy):
        raise ValueError(f"group_by must be one of {get_args(GroupBy)}, got {value!r}")
    return value  # type: ignore[return-value]


def validate_filter(value: str) -> FilterMode:
    if value not in get_args(FilterMode):
        raise ValueError(f"filter must be one of {get_args(FilterMode)}, got {value!r}")
    return value  # type: ignore[return-value]


def group_label(group_by: GroupBy) -> str:
    return "Team" if group_by == "team" else "Position"
