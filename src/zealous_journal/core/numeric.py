"""Small float helpers shared by the sizing and analytics modules.

Every derived number leaving this package must be finite, so the
guards live in one place.
"""

from __future__ import annotations

import math
from typing import Any, Iterable


def finite_or_zero(value: Any) -> float:
    """Coerce *value* to a finite float; ``None``, NaN, +/-inf and junk map to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0.0
    return f if math.isfinite(f) else 0.0


def safe_div(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator or non-finite result."""
    if denominator == 0:
        return 0.0
    return finite_or_zero(numerator / denominator)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, finite_or_zero(value)))


def finite_sum(values: Iterable[float]) -> float:
    """Exact sum of *values*, 0.0 when it leaves the float range.

    Terms are added in sorted order, so an intermediate overflow (and
    therefore the result) does not depend on the order of *values*.
    """
    try:
        return finite_or_zero(math.fsum(sorted(values)))
    except OverflowError:
        return 0.0
