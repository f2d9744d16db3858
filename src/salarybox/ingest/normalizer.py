"""Resolve column roles and normalize raw salary cells."""

from __future__ import annotations

import logging
import math
import numbers
import re
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence

from salarybox.config import REQUIRED_ROLES, ROLES, ColumnKeywords, get_keywords
from salarybox.models import ColumnBinding


logger = logging.getLogger(__name__)

Record = Mapping[str, Any]

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


class MissingColumnError(ValueError):
    """Raised when a mandatory column role cannot be bound to a field."""

    def __init__(self, missing: Sequence[str], available: Sequence[str]):
        self.missing = tuple(missing)
        self.available = tuple(available)
        if self.available:
            found = ", ".join(self.available)
        else:
            found = "(none)"
        super().__init__(
            f"No column found for {', '.join(self.missing)}; available columns: {found}"
        )


def parse_salary(value: Any) -> Optional[float]:
    """Return the numeric salary held in ``value`` or ``None``.

    Strings such as ``"12,345万円"`` or ``"$9,400"`` keep only their digits and
    decimal points before the leading number is read. Never raises.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value.replace(",", ""))
        match = _LEADING_NUMBER.match(cleaned)
        if match is None:
            return None
        return float(match.group(0))
    return None


def is_blank_key(value: Any) -> bool:
    """Group keys that are missing or empty never form a group."""

    return value is None or value == ""


def cell_text(value: Any) -> str:
    """Render a raw cell for display; integral floats drop their ``.0``."""

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def header_fields(records: Sequence[Record]) -> List[str]:
    first = next((record for record in records if len(record) > 0), None)
    if first is None:
        return []
    return [str(key) for key in first.keys()]


def _find_field(fields: Sequence[str], keywords: Sequence[str]) -> Optional[str]:
    lowered = [keyword.lower() for keyword in keywords]
    for field in fields:
        candidate = field.lower()
        if any(keyword in candidate for keyword in lowered):
            return field
    return None


def detect_columns(
    records: Sequence[Record],
    *,
    keywords: ColumnKeywords | str | None = None,
    overrides: Mapping[str, str] | None = None,
) -> ColumnBinding:
    """Bind the team/position/salary/name roles to fields of ``records``.

    Field names come from the first record with at least one key. Explicit
    ``overrides`` win over keyword matching; among keyword matches the first
    field in declaration order is chosen.
    """

    if keywords is None or isinstance(keywords, str):
        keywords = get_keywords(keywords or "auto")
    overrides = dict(overrides or {})
    unknown_roles = set(overrides) - set(ROLES)
    if unknown_roles:
        raise ValueError(f"Unknown column roles in overrides: {sorted(unknown_roles)}")

    fields = header_fields(records)
    resolved: dict[str, Optional[str]] = {}
    for role in ROLES:
        if role in overrides:
            requested = overrides[role]
            resolved[role] = requested if requested in fields else None
            if resolved[role] is None:
                logger.debug("Override %s=%r does not name a column", role, requested)
            continue
        resolved[role] = _find_field(fields, keywords.for_role(role))

    missing = [role for role in REQUIRED_ROLES if resolved[role] is None]
    if missing:
        logger.debug("Columns found: %s", fields)
        raise MissingColumnError(missing, fields)

    binding = ColumnBinding(
        team=resolved["team"],
        position=resolved["position"],
        salary=resolved["salary"],
        name=resolved["name"],
    )
    logger.debug("Detected columns: %s", binding.model_dump())
    return binding


__all__ = [
    "MissingColumnError",
    "Record",
    "cell_text",
    "detect_columns",
    "header_fields",
    "is_blank_key",
    "parse_salary",
]
