"""
Pydantic models for live performance simulation.
"""

from datetime import datetime

from pydantic import BaseModel

from solarjo.config import Location


class SimulationInput(BaseModel):
    system_size_kw: float
    location: Location = Location.AMMAN
    panel_tilt_deg: float = 30.0
    panel_azimuth_deg: float = 180.0
    system_loss_percent: float = 15.0


class SimulationDataPoint(BaseModel):
    """Instantaneous output of the array under the given weather."""
    time: datetime
    solar_irradiance_w_m2: float   # plane irradiance estimate after clouds
    temperature_c: float           # ambient
    cell_temperature_c: float
    cloud_cover_percent: float
    output_power_w: float


class SimulationResult(BaseModel):
    location: Location
    current: SimulationDataPoint
    forecast: SimulationDataPoint   # tomorrow's daily average conditions
