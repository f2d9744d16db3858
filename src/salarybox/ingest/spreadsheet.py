"""Decode uploaded spreadsheets into ordered records."""

from __future__ import annotations

import csv
import logging
import zipfile
from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException


logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv", ".txt"}
CSV_ENCODINGS = ("utf-8-sig", "cp932")


class DecodeError(ValueError):
    """Raised when an uploaded file cannot be read as a table."""


def _header_names(header: Sequence[Any]) -> List[str]:
    names: List[str] = []
    seen: dict[str, int] = {}
    for idx, value in enumerate(header):
        name = str(value).strip() if value is not None else ""
        if not name:
            name = f"col_{idx + 1}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        names.append(name)
    return names


def _rows_to_records(
    header: Sequence[Any], rows: Iterable[Sequence[Any]]
) -> List[dict[str, Any]]:
    names = _header_names(header)
    records: List[dict[str, Any]] = []
    for row in rows:
        values = list(row[: len(names)])
        if len(values) < len(names):
            values.extend([None] * (len(names) - len(values)))
        values = [None if value == "" else value for value in values]
        if all(value is None for value in values):
            continue
        records.append(dict(zip(names, values)))
    return records


def read_excel_bytes(contents: bytes) -> List[dict[str, Any]]:
    """Read the first worksheet; row 1 holds the headers."""

    try:
        wb = openpyxl.load_workbook(BytesIO(contents), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        raise DecodeError(f"Unable to open workbook: {exc}") from exc
    try:
        if not wb.worksheets:
            raise DecodeError("Workbook has no worksheets")
        ws = wb.worksheets[0]
        rows_iter = ws.iter_rows(values_only=True)
        header = next(rows_iter, None)
        if header is None:
            return []
        return _rows_to_records(header, rows_iter)
    finally:
        wb.close()


def read_csv_bytes(contents: bytes) -> List[dict[str, Any]]:
    text: Optional[str] = None
    for encoding in CSV_ENCODINGS:
        try:
            text = contents.decode(encoding)
            break
        except UnicodeDecodeError:
            logger.debug("CSV is not %s encoded", encoding)
    if text is None:
        raise DecodeError("CSV file is not UTF-8 or Shift_JIS encoded")
    try:
        rows = list(csv.reader(StringIO(text, newline="")))
    except csv.Error as exc:
        raise DecodeError(f"Malformed CSV: {exc}") from exc
    if not rows:
        return []
    return _rows_to_records(rows[0], rows[1:])


def read_table(contents: bytes, filename: str) -> List[dict[str, Any]]:
    """Decode ``contents`` based on the extension of ``filename``."""

    suffix = Path(filename or "").suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        records = read_excel_bytes(contents)
    elif suffix in CSV_SUFFIXES:
        records = read_csv_bytes(contents)
    else:
        raise DecodeError(f"Unsupported file type {suffix or '(none)'!r}; upload .xlsx or .csv")
    logger.info("Decoded %d rows from %s", len(records), filename)
    return records


def read_table_path(path: Path) -> List[dict[str, Any]]:
    try:
        contents = path.read_bytes()
    except OSError as exc:
        raise DecodeError(f"Unable to read {path}: {exc}") from exc
    return read_table(contents, path.name)


__all__ = [
    "DecodeError",
    "read_csv_bytes",
    "read_excel_bytes",
    "read_table",
    "read_table_path",
]
