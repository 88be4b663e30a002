"""
API routes for weather data.
"""

from fastapi import APIRouter, Depends, HTTPException

from solarjo.api.dependencies import get_weather_client
from solarjo.config import Location
from solarjo.engine.climate import load_climate_table
from solarjo.engine.weather import WeatherClient
from solarjo.errors import ExternalServiceFailure
from solarjo.models.weather import HistoricalIrradiance, WeatherConditions

router = APIRouter(prefix="/api/v1", tags=["weather"])


@router.get("/weather/{location}", response_model=WeatherConditions)
def weather_conditions(
    location: Location,
    weather: WeatherClient = Depends(get_weather_client),
) -> WeatherConditions:
    """Current conditions and tomorrow's forecast for a city."""
    try:
        return weather.fetch_conditions(location)
    except ExternalServiceFailure as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/weather/{location}/historical", response_model=HistoricalIrradiance)
def historical_irradiance(
    location: Location,
    weather: WeatherClient = Depends(get_weather_client),
) -> HistoricalIrradiance:
    """Long-term monthly irradiation for a city, in Wh/m²/day."""
    loc = load_climate_table().get(location)
    try:
        values = weather.fetch_historical_irradiance(loc.latitude, loc.longitude)
    except ExternalServiceFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    return HistoricalIrradiance(
        latitude=loc.latitude,
        longitude=loc.longitude,
        monthly_irradiance_wh=values,
    )
