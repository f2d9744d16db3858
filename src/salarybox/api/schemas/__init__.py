"""Pydantic models for API I/O."""

from .analysis import AnalysisResponse
from .dataset import ColumnOverridesPayload, DatasetSummaryResponse, TableResponse

__all__ = [
    "AnalysisResponse",
    "ColumnOverridesPayload",
    "DatasetSummaryResponse",
    "TableResponse",
]
