"""Shared pydantic models."""

from .records import ColumnBinding, Distribution, HighlightEntry

__all__ = ["ColumnBinding", "Distribution", "HighlightEntry"]
