"""
Panel count from monthly consumption.

  total_kWh = bill / price
  daily_kWh = total_kWh / 30
  panels    = ceil(daily_kWh × 1000 / (sun_hours × W_panel × (1 − loss/100)))

The 30-day month is a deliberate billing-cycle simplification. The financial
model uses the real calendar; the two are intentionally not unified.
"""

import math

from solarjo.config import DAYS_PER_BILLING_MONTH, MAX_SYSTEM_LOSS_PERCENT, MIN_SYSTEM_LOSS_PERCENT
from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.panels import PanelCountInput, PanelCountResult


def compute_panels_from_consumption(ci: PanelCountInput) -> PanelCountResult:
    """Number of panels needed to cover the consumption implied by a bill."""
    require_finite(
        monthly_bill=ci.monthly_bill,
        kwh_price=ci.kwh_price,
        sun_hours=ci.sun_hours,
        panel_wattage=ci.panel_wattage,
        system_loss_percent=ci.system_loss_percent,
    )
    if ci.monthly_bill <= 0:
        raise InvalidInput("monthly_bill must be positive")
    if ci.kwh_price <= 0:
        raise InvalidInput("kwh_price must be positive")
    if ci.sun_hours <= 0:
        raise InvalidInput("sun_hours must be positive")
    if ci.panel_wattage <= 0:
        raise InvalidInput("panel_wattage must be positive")
    if not MIN_SYSTEM_LOSS_PERCENT <= ci.system_loss_percent <= MAX_SYSTEM_LOSS_PERCENT:
        raise InvalidInput("system_loss_percent must be between 0 and 99")

    total_kwh = ci.monthly_bill / ci.kwh_price
    daily_kwh = total_kwh / DAYS_PER_BILLING_MONTH

    effective_wh = ci.sun_hours * ci.panel_wattage * (1.0 - ci.system_loss_percent / 100.0)
    # Always round up, never under-provision
    required_panels = math.ceil(daily_kwh * 1000.0 / effective_wh)

    return PanelCountResult(
        total_kwh=total_kwh,
        daily_kwh=daily_kwh,
        per_panel_daily_kwh=effective_wh / 1000.0,
        required_panels=required_panels,
        system_size_kw=required_panels * ci.panel_wattage / 1000.0,
    )
