"""Input adapters that decode spreadsheets and normalize salary records."""

from .normalizer import (
    MissingColumnError,
    Record,
    cell_text,
    detect_columns,
    header_fields,
    is_blank_key,
    parse_salary,
)
from .spreadsheet import DecodeError, read_table, read_table_path

__all__ = [
    "DecodeError",
    "MissingColumnError",
    "Record",
    "cell_text",
    "detect_columns",
    "header_fields",
    "is_blank_key",
    "parse_salary",
    "read_table",
    "read_table_path",
]
