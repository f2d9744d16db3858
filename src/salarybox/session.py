"""In-memory ownership of the currently loaded dataset."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from salarybox.config import ColumnKeywords
from salarybox.ingest import MissingColumnError, Record, detect_columns
from salarybox.models import ColumnBinding


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetSession:
    """One successfully loaded table together with its column binding."""

    records: Tuple[Mapping[str, Any], ...]
    binding: ColumnBinding
    fields: Tuple[str, ...]
    source_name: str = ""
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def row_count(self) -> int:
        return len(self.records)


def load_session(
    records: Sequence[Record],
    *,
    source_name: str = "",
    keywords: ColumnKeywords | str | None = None,
    overrides: Mapping[str, str] | None = None,
) -> DatasetSession:
    """Bind columns and freeze ``records``; raises MissingColumnError."""

    binding = detect_columns(records, keywords=keywords, overrides=overrides)
    frozen = tuple(MappingProxyType(dict(record)) for record in records)
    fields = tuple(str(key) for key in frozen[0].keys()) if frozen else ()
    session = DatasetSession(
        records=frozen,
        binding=binding,
        fields=fields,
        source_name=source_name,
    )
    logger.info("Loaded %d records from %s", session.row_count, source_name or "<memory>")
    return session


class SessionStore:
    """Holds the active session; replaced wholesale on every load."""

    def __init__(self) -> None:
        self._current: Optional[DatasetSession] = None

    @property
    def current(self) -> Optional[DatasetSession]:
        return self._current

    def load(
        self,
        records: Sequence[Record],
        *,
        source_name: str = "",
        keywords: ColumnKeywords | str | None = None,
        overrides: Mapping[str, str] | None = None,
    ) -> DatasetSession:
        try:
            session = load_session(
                records,
                source_name=source_name,
                keywords=keywords,
                overrides=overrides,
            )
        except MissingColumnError:
            self._current = None
            raise
        self._current = session
        return session

    def reset(self) -> None:
        self._current = None


__all__ = ["DatasetSession", "SessionStore", "load_session"]
