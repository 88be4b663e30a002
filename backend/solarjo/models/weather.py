"""
Pydantic models for weather service data.
"""

from pydantic import BaseModel

from solarjo.config import Location


class WeatherSnapshot(BaseModel):
    """Irradiance proxies at one moment (current) or for one day (forecast)."""
    temperature_c: float
    cloud_cover_percent: float    # 0-100
    uv_index: float


class WeatherConditions(BaseModel):
    """Current conditions plus tomorrow's forecast for a city."""
    location: Location
    current: WeatherSnapshot
    forecast: WeatherSnapshot


class HistoricalIrradiance(BaseModel):
    """Long-term monthly average irradiation for a coordinate."""
    latitude: float
    longitude: float
    monthly_irradiance_wh: list[float]   # Wh/m²/day, 12 entries
