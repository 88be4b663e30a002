"""
Maximum panel count and production for an available area.

Rectangular plots are laid out in rows along the plot width; rows are spaced
by the panel dimension across the row times a 1.5 spacing factor to avoid
self-shading. Portrait and landscape are both evaluated; ``auto`` keeps the
larger count (portrait on a tie).

Polygon areas from the map widget have no row geometry, so the count is the
area divided by the spaced panel footprint.
"""

import math

from solarjo.config import DAYS_PER_BILLING_MONTH, ROW_SPACING_FACTOR
from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.area import AreaProductionInput, AreaProductionResult, Orientation


def _layout(width: float, length: float, along_row: float, across_row: float) -> tuple[int, int]:
    """(rows, panels_per_row) for one orientation."""
    rows = math.floor(length / (across_row * ROW_SPACING_FACTOR))
    per_row = math.floor(width / along_row)
    return rows, per_row


def _production(panels: int, panel_wattage: float, sun_hours: float) -> tuple[float, float]:
    total_kw = panels * panel_wattage / 1000.0
    return total_kw, total_kw * sun_hours


def calculate_area_production(ci: AreaProductionInput) -> AreaProductionResult:
    """Panel count and energy yield for a plot or drawn polygon."""
    require_finite(
        panel_width_m=ci.panel_width_m,
        panel_length_m=ci.panel_length_m,
        panel_wattage=ci.panel_wattage,
        sun_hours=ci.sun_hours,
    )
    for name in ("land_width_m", "land_length_m", "polygon_area_m2"):
        if getattr(ci, name) is not None:
            require_finite(**{name: getattr(ci, name)})
    if ci.panel_width_m <= 0 or ci.panel_length_m <= 0:
        raise InvalidInput("panel dimensions must be positive")
    if ci.panel_wattage <= 0:
        raise InvalidInput("panel_wattage must be positive")
    if ci.sun_hours <= 0:
        raise InvalidInput("sun_hours must be positive")

    if ci.polygon_area_m2 is not None:
        if ci.polygon_area_m2 <= 0:
            raise InvalidInput("polygon_area_m2 must be positive")
        footprint = ci.panel_width_m * ci.panel_length_m * ROW_SPACING_FACTOR
        panels = math.floor(ci.polygon_area_m2 / footprint)
        total_kw, daily = _production(panels, ci.panel_wattage, ci.sun_hours)
        return AreaProductionResult(
            max_panels=panels,
            total_power_kw=total_kw,
            daily_energy_kwh=daily,
            monthly_energy_kwh=daily * DAYS_PER_BILLING_MONTH,
            yearly_energy_kwh=daily * 365,
        )

    if ci.land_width_m is None or ci.land_length_m is None:
        raise InvalidInput("land_width_m and land_length_m are required without polygon_area_m2")
    if ci.land_width_m <= 0 or ci.land_length_m <= 0:
        raise InvalidInput("land dimensions must be positive")

    portrait = _layout(ci.land_width_m, ci.land_length_m, ci.panel_width_m, ci.panel_length_m)
    landscape = _layout(ci.land_width_m, ci.land_length_m, ci.panel_length_m, ci.panel_width_m)

    if ci.orientation == Orientation.PORTRAIT:
        chosen, (rows, per_row) = Orientation.PORTRAIT, portrait
    elif ci.orientation == Orientation.LANDSCAPE:
        chosen, (rows, per_row) = Orientation.LANDSCAPE, landscape
    elif portrait[0] * portrait[1] >= landscape[0] * landscape[1]:
        chosen, (rows, per_row) = Orientation.PORTRAIT, portrait
    else:
        chosen, (rows, per_row) = Orientation.LANDSCAPE, landscape

    panels = rows * per_row
    total_kw, daily = _production(panels, ci.panel_wattage, ci.sun_hours)

    return AreaProductionResult(
        max_panels=panels,
        total_power_kw=total_kw,
        daily_energy_kwh=daily,
        monthly_energy_kwh=daily * DAYS_PER_BILLING_MONTH,
        yearly_energy_kwh=daily * 365,
        final_orientation=chosen,
        panels_per_row=per_row,
        row_count=rows,
    )
