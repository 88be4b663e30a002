"""
Design optimizer: the largest system that satisfies both constraints.

  consumption size = (monthly_kWh / 30) / (avg sun-hours × loss factor)
  area size        = floor(area / spaced panel footprint) × W / 1000

The smaller of the two wins and names the limiting factor. The rest of the
design (panels, inverter, strings, DC main cable, finances) is derived from
that size with the other calculators.
"""

import math

from solarjo.config import (
    DAYS_PER_BILLING_MONTH,
    MAX_SYSTEM_LOSS_PERCENT,
    MIN_SYSTEM_LOSS_PERCENT,
    OPTIMIZER_AZIMUTH_DEG,
    OPTIMIZER_INVERTER_RATIO,
    OPTIMIZER_PANEL_LENGTH_M,
    OPTIMIZER_PANEL_WIDTH_M,
    OPTIMIZER_THREE_PHASE_ABOVE_KW,
    OPTIMIZER_TILT_DEG,
    ROW_SPACING_FACTOR,
)
from solarjo.engine.climate import load_climate_table
from solarjo.engine.financial import compute_financial_viability
from solarjo.engine.string_config import solve_string_configuration
from solarjo.engine.wire_sizing import compute_wire_size
from solarjo.errors import InvalidInput, SizeUnavailable
from solarjo.engine.validation import require_finite
from solarjo.models.financial import SystemSpec
from solarjo.models.optimizer import (
    DesignOptimizerInput,
    DesignOptimizerResult,
    InverterConfig,
    LimitingFactor,
    PanelConfig,
)


def optimize_design(ci: DesignOptimizerInput) -> DesignOptimizerResult:
    require_finite(
        monthly_consumption_kwh=ci.monthly_consumption_kwh,
        surface_area_m2=ci.surface_area_m2,
        system_loss_percent=ci.system_loss_percent,
        panel_wattage=ci.panel_wattage,
        panel_voltage_v=ci.panel_voltage_v,
        panel_current_a=ci.panel_current_a,
        cost_per_watt=ci.cost_per_watt,
        kwh_price=ci.kwh_price,
        max_input_voltage_v=ci.limits.max_input_voltage_v,
        max_input_current_a=ci.limits.max_input_current_a,
    )
    if ci.monthly_consumption_kwh <= 0:
        raise InvalidInput("monthly_consumption_kwh must be positive")
    if ci.surface_area_m2 <= 0:
        raise InvalidInput("surface_area_m2 must be positive")
    if not MIN_SYSTEM_LOSS_PERCENT <= ci.system_loss_percent <= MAX_SYSTEM_LOSS_PERCENT:
        raise InvalidInput("system_loss_percent must be between 0 and 99")
    if ci.panel_wattage <= 0:
        raise InvalidInput("panel_wattage must be positive")
    if ci.panel_voltage_v <= 0 or ci.panel_current_a <= 0:
        raise InvalidInput("panel_voltage_v and panel_current_a must be positive")
    if ci.limits.max_input_voltage_v <= 0:
        raise InvalidInput("equipment limits must be positive")
    if ci.cost_per_watt <= 0 or ci.kwh_price <= 0:
        raise InvalidInput("cost_per_watt and kwh_price must be positive")

    climate = load_climate_table().get(ci.location)
    loss_factor = 1.0 - ci.system_loss_percent / 100.0

    # 1. Constraint sizes (kWp)
    daily_kwh = ci.monthly_consumption_kwh / DAYS_PER_BILLING_MONTH
    consumption_size = daily_kwh / (climate.annual_average_sun_hours * loss_factor)

    panel_footprint = OPTIMIZER_PANEL_WIDTH_M * OPTIMIZER_PANEL_LENGTH_M * ROW_SPACING_FACTOR
    max_panels_area = math.floor(ci.surface_area_m2 / panel_footprint)
    area_size = max_panels_area * ci.panel_wattage / 1000.0

    if consumption_size <= area_size:
        limiting, size_kw = LimitingFactor.CONSUMPTION, consumption_size
    else:
        limiting, size_kw = LimitingFactor.AREA, area_size

    # 2. Panels for the chosen size
    panel_count = math.floor(round(size_kw * 1000.0 / ci.panel_wattage, 6))
    if panel_count < 1:
        raise InvalidInput(
            f"Surface area {ci.surface_area_m2:g} m² cannot hold a single panel "
            f"({panel_footprint:.2f} m² with row spacing)"
        )
    total_dc_kw = panel_count * ci.panel_wattage / 1000.0

    # 3. Strings: fewest parallel strings that respect the voltage ceiling
    max_per_string = max(1, math.floor(ci.limits.max_input_voltage_v / ci.panel_voltage_v))
    strings = math.ceil(panel_count / max_per_string)
    per_string = math.ceil(panel_count / strings)
    wiring = solve_string_configuration(
        ci.panel_voltage_v,
        ci.panel_current_a,
        per_string * ci.panel_voltage_v,
        strings * ci.panel_current_a,
        ci.limits,
    )

    warnings: list[str] = []
    if wiring.total_panels != panel_count:
        warnings.append(
            f"String layout holds {wiring.total_panels} panels for a design of {panel_count}; "
            "adjust the last string by hand."
        )

    # 4. DC main cable
    dc_cable = None
    if ci.dc_cable_length_m is not None:
        try:
            dc_cable = compute_wire_size(
                wiring.array_current_a,
                wiring.string_voltage_v,
                ci.dc_cable_length_m,
                ci.max_voltage_drop_percent,
            )
        except SizeUnavailable as exc:
            warnings.append(str(exc))

    # 5. Finances for the installed DC power
    financial = compute_financial_viability(
        SystemSpec(
            size_kw=total_dc_kw,
            system_loss_percent=ci.system_loss_percent,
            tilt_deg=OPTIMIZER_TILT_DEG,
            azimuth_deg=OPTIMIZER_AZIMUTH_DEG,
        ),
        ci.location,
        ci.cost_per_watt * 1000.0,
        ci.kwh_price,
    )

    return DesignOptimizerResult(
        limiting_factor=limiting,
        consumption_based_size_kw=consumption_size,
        area_based_size_kw=area_size,
        panel_config=PanelConfig(
            panel_count=panel_count,
            panel_wattage=ci.panel_wattage,
            total_dc_power_kw=total_dc_kw,
            required_area_m2=panel_count * panel_footprint,
            tilt_deg=OPTIMIZER_TILT_DEG,
            azimuth_deg=OPTIMIZER_AZIMUTH_DEG,
        ),
        inverter_config=InverterConfig(
            recommended_size_kw=total_dc_kw * OPTIMIZER_INVERTER_RATIO,
            phase="three" if total_dc_kw > OPTIMIZER_THREE_PHASE_ABOVE_KW else "single",
        ),
        wiring=wiring,
        dc_cable=dc_cable,
        financial=financial,
        warnings=warnings,
    )
