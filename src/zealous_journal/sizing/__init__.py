"""Position sizing / risk calculator."""

from .calculator import (
    CalculationResult,
    compute_position_sizing,
    compute_position_sizing_for_symbol,
)

__all__ = [
    "CalculationResult",
    "compute_position_sizing",
    "compute_position_sizing_for_symbol",
]
