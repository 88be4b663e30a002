"""
String configuration solver.

Series panels add voltage, parallel strings add current:
  panels_per_string ≈ V_desired / V_panel
  parallel_strings  ≈ I_desired / I_panel

Both counts are rounded to the nearest integer; an exact half rounds down so
the array never lands above the requested voltage/current on a tie. The
counts are then clamped to at least one and to the equipment input ceilings.
"""

import math
from typing import Optional

from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.string_config import EquipmentLimits, StringConfigResult

# Ratios within this distance of .5 are treated as exact ties
_TIE_TOLERANCE = 1e-9


def round_half_down(x: float) -> int:
    """Nearest integer, ties toward the lower count."""
    lower = math.floor(x)
    if x - lower > 0.5 + _TIE_TOLERANCE:
        return lower + 1
    return lower


def _clamped_count(ratio: float, unit: float, ceiling: float, what: str) -> tuple[int, bool]:
    """Round ``ratio`` and clamp to [1, floor(ceiling / unit)]."""
    max_count = math.floor(ceiling / unit + _TIE_TOLERANCE)
    if max_count < 1:
        raise InvalidInput(
            f"A single panel ({unit:g}) already exceeds the maximum input {what} ({ceiling:g})"
        )
    count = max(1, round_half_down(ratio))
    if count > max_count:
        return max_count, True
    return count, False


def solve_string_configuration(
    panel_voltage_v: float,
    panel_current_a: float,
    desired_system_voltage_v: float,
    desired_system_current_a: float,
    limits: Optional[EquipmentLimits] = None,
) -> StringConfigResult:
    """Panels per string and parallel strings for the requested operating point."""
    require_finite(
        panel_voltage_v=panel_voltage_v,
        panel_current_a=panel_current_a,
        desired_system_voltage_v=desired_system_voltage_v,
        desired_system_current_a=desired_system_current_a,
    )
    if panel_voltage_v <= 0:
        raise InvalidInput("panel_voltage_v must be positive")
    if panel_current_a <= 0:
        raise InvalidInput("panel_current_a must be positive")
    if desired_system_voltage_v <= 0:
        raise InvalidInput("desired_system_voltage_v must be positive")
    if desired_system_current_a <= 0:
        raise InvalidInput("desired_system_current_a must be positive")

    lim = limits if limits is not None else EquipmentLimits()
    require_finite(
        max_input_voltage_v=lim.max_input_voltage_v,
        max_input_current_a=lim.max_input_current_a,
    )
    if lim.max_input_voltage_v <= 0 or lim.max_input_current_a <= 0:
        raise InvalidInput("equipment limits must be positive")

    panels_per_string, voltage_limited = _clamped_count(
        desired_system_voltage_v / panel_voltage_v,
        panel_voltage_v,
        lim.max_input_voltage_v,
        "voltage",
    )
    parallel_strings, current_limited = _clamped_count(
        desired_system_current_a / panel_current_a,
        panel_current_a,
        lim.max_input_current_a,
        "current",
    )

    return StringConfigResult(
        panels_per_string=panels_per_string,
        parallel_strings=parallel_strings,
        total_panels=panels_per_string * parallel_strings,
        string_voltage_v=panels_per_string * panel_voltage_v,
        array_current_a=parallel_strings * panel_current_a,
        voltage_limited=voltage_limited,
        current_limited=current_limited,
        limits=lim,
    )
