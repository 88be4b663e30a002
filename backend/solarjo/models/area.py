"""
Pydantic models for area-based production sizing.

Provides models for:
  - Rectangular plot layout: rows × panels per row, portrait or landscape
  - Polygon area (from the map drawing widget): footprint-based panel count
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Orientation(str, Enum):
    AUTO = "auto"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class AreaProductionInput(BaseModel):
    """Either land_width/land_length or polygon_area_m2 must be given."""
    land_width_m: Optional[float] = None
    land_length_m: Optional[float] = None
    polygon_area_m2: Optional[float] = None
    panel_width_m: float = 1.13
    panel_length_m: float = 2.28
    panel_wattage: float = 550.0
    sun_hours: float = 5.5
    orientation: Orientation = Orientation.AUTO


class AreaProductionResult(BaseModel):
    max_panels: int
    total_power_kw: float
    daily_energy_kwh: float
    monthly_energy_kwh: float    # 30-day month
    yearly_energy_kwh: float     # 365 days
    final_orientation: Optional[Orientation] = None   # None for polygon areas
    panels_per_row: Optional[int] = None
    row_count: Optional[int] = None
