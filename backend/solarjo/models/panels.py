"""
Pydantic models for the panel-count-from-consumption calculator.
"""

from typing import Optional

from pydantic import BaseModel

from solarjo.models.explanation import Explanation


class PanelCountInput(BaseModel):
    """Input for sizing a panel count from a monthly electricity bill."""
    monthly_bill: float          # JOD
    kwh_price: float             # JOD/kWh
    sun_hours: float = 5.5       # peak sun-hours per day
    panel_wattage: float = 450.0 # W
    system_loss_percent: float = 15.0


class PanelCountResult(BaseModel):
    """Result of the panel count calculation."""
    total_kwh: float             # monthly consumption
    daily_kwh: float             # total_kwh / 30
    per_panel_daily_kwh: float   # after losses
    required_panels: int
    system_size_kw: float        # required_panels × wattage
    explanation: Optional[Explanation] = None
