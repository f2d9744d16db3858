"""Presentation adapters: Plotly figures, text tables and mode text."""

from .chart import (
    build_box_figure,
    build_empty_figure,
    figure_to_html,
    figure_to_json,
)
from .tables import TableView, highlight_table, preview_table, table_to_csv
from .text import describe_mode

__all__ = [
    "TableView",
    "build_box_figure",
    "build_empty_figure",
    "describe_mode",
    "figure_to_html",
    "figure_to_json",
    "highlight_table",
    "preview_table",
    "table_to_csv",
]
