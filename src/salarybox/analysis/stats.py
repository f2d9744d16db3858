"""Order statistics used by the box-plot pipeline."""

from __future__ import annotations

import math
import statistics
from typing import Sequence, Tuple

from salarybox.config.controls import IQR_MULTIPLIER


def quantile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolation quantile of an ascending sequence (NaN if empty)."""

    n = len(sorted_values)
    if n == 0:
        return math.nan
    index = (n - 1) * p
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return float(sorted_values[lower])
    weight = index - lower
    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight


def median(values: Sequence[float]) -> float:
    if not values:
        return math.nan
    return float(statistics.median(sorted(values)))


def iqr_bounds(sorted_values: Sequence[float], *, k: float = IQR_MULTIPLIER) -> Tuple[float, float]:
    """Return the inclusive ``(lower, upper)`` Tukey fences."""

    q1 = quantile(sorted_values, 0.25)
    q3 = quantile(sorted_values, 0.75)
    iqr = q3 - q1
    return q1 - k * iqr, q3 + k * iqr


__all__ = ["iqr_bounds", "median", "quantile"]
