"""
Shared input guards for the calculators.

Range checks written as ``x <= 0`` or ``lo <= x <= hi`` let NaN and ±inf
through, so every numeric input is checked for finiteness first.
"""

import math

from solarjo.errors import InvalidInput


def require_finite(**values: float) -> None:
    """Raise InvalidInput naming the first argument that is NaN or infinite."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidInput(f"{name} must be a finite number, got {value}")
