"""
DC wire sizing by the voltage drop method.

  R(A)  = ρ / A                      (Ω/m, copper ρ = 0.0172 Ω·mm²/m)
  Vd    = 2 × L × I × R(A)           (factor 2: out and back)
  P_loss = Vd × I

The recommended conductor is the smallest standard size with
Vd ≤ V × pct / 100. If none of them qualifies the request is infeasible.
"""

from functools import lru_cache
from typing import Optional

from solarjo.config import COPPER_RESISTIVITY, MAX_VOLTAGE_DROP_PERCENT, STANDARD_WIRE_SIZES_MM2
from solarjo.errors import InvalidInput, SizeUnavailable
from solarjo.engine.validation import require_finite
from solarjo.models.wire_sizing import Conductor, ConductorTable, WireSizingResult


@lru_cache(maxsize=1)
def standard_copper_table() -> ConductorTable:
    """Standard copper cross-sections with their resistance per metre."""
    return ConductorTable(
        material="copper",
        conductors=tuple(
            Conductor(size_mm2=size, resistance_ohm_per_m=COPPER_RESISTIVITY / size)
            for size in sorted(STANDARD_WIRE_SIZES_MM2)
        ),
    )


def voltage_drop(current_a: float, distance_m: float, resistance_ohm_per_m: float) -> float:
    """Round-trip voltage drop along a two-conductor DC run."""
    return 2.0 * distance_m * current_a * resistance_ohm_per_m


def compute_wire_size(
    current_a: float,
    voltage_v: float,
    distance_m: float,
    max_voltage_drop_percent: float,
    conductors: Optional[ConductorTable] = None,
) -> WireSizingResult:
    """Smallest standard conductor that keeps the voltage drop within limit."""
    require_finite(
        current_a=current_a,
        voltage_v=voltage_v,
        distance_m=distance_m,
        max_voltage_drop_percent=max_voltage_drop_percent,
    )
    if current_a <= 0:
        raise InvalidInput("current_a must be positive")
    if voltage_v <= 0:
        raise InvalidInput("voltage_v must be positive")
    if distance_m <= 0:
        raise InvalidInput("distance_m must be positive")
    if not 0.0 < max_voltage_drop_percent <= MAX_VOLTAGE_DROP_PERCENT:
        raise InvalidInput("max_voltage_drop_percent must be in (0, 10]")

    table = conductors if conductors is not None else standard_copper_table()
    max_drop = voltage_v * max_voltage_drop_percent / 100.0

    for conductor in table.conductors:
        drop = voltage_drop(current_a, distance_m, conductor.resistance_ohm_per_m)
        if drop <= max_drop:
            return WireSizingResult(
                recommended_wire_size_mm2=conductor.size_mm2,
                resistance_ohm_per_m=conductor.resistance_ohm_per_m,
                actual_voltage_drop_v=drop,
                actual_voltage_drop_percent=drop / voltage_v * 100.0,
                max_allowed_voltage_drop_v=max_drop,
                power_loss_w=drop * current_a,
            )

    # Theoretical cross-section for the message (same ρ as the table's largest entry)
    required_area = None
    if table.conductors:
        largest = table.conductors[-1]
        resistivity = largest.resistance_ohm_per_m * largest.size_mm2
        required_area = 2.0 * resistivity * distance_m * current_a / max_drop
    raise SizeUnavailable(
        f"No standard {table.material} conductor keeps the voltage drop within "
        f"{max_voltage_drop_percent:g}% ({max_drop:.2f} V); "
        "increase allowed drop or reduce distance/current",
        required_area_mm2=required_area,
    )
