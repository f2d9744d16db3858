"""Configuration helpers for column detection and analysis controls."""

from .columns import (
    DEFAULT_PROFILE,
    PROFILE_CHOICES,
    REQUIRED_ROLES,
    ROLES,
    ColumnKeywords,
    get_keywords,
    iter_keywords,
)
from .controls import (
    FILTER_CHOICES,
    GROUP_BY_CHOICES,
    FilterMode,
    GroupBy,
    group_label,
    validate_filter,
    validate_group_by,
)

__all__ = [
    "ColumnKeywords",
    "DEFAULT_PROFILE",
    "PROFILE_CHOICES",
    "REQUIRED_ROLES",
    "ROLES",
    "get_keywords",
    "iter_keywords",
    "FILTER_CHOICES",
    "GROUP_BY_CHOICES",
    "FilterMode",
    "GroupBy",
    "group_label",
    "validate_filter",
    "validate_group_by",
]
