"""
Weather service client.

Two upstream sources:
  - weatherapi.com forecast endpoint: current conditions and tomorrow's
    forecast (temperature, cloud cover, UV index) for a city.
  - NASA POWER climatology endpoint: long-term monthly average all-sky
    surface irradiation for a coordinate.

Every failure (missing key, timeout, HTTP error, unusable payload) is raised
as ExternalServiceFailure. The client never substitutes zeros.
"""

import logging
import math
from typing import Optional

import requests

from solarjo import config
from solarjo.config import Location
from solarjo.engine.climate import load_climate_table
from solarjo.errors import ExternalServiceFailure
from solarjo.models.weather import WeatherConditions, WeatherSnapshot

logger = logging.getLogger(__name__)

_MONTH_KEYS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN",
               "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
_POWER_PARAMETER = "ALLSKY_SFC_SW_DWN"   # kWh/m²/day
_POWER_FILL_VALUE = -999.0


class WeatherClient:
    """Thin wrapper around the weather HTTP APIs."""

    def __init__(
        self,
        api_key: str = config.WEATHER_API_KEY,
        api_url: str = config.WEATHER_API_URL,
        power_url: str = config.NASA_POWER_URL,
        timeout: float = config.WEATHER_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.power_url = power_url
        self.timeout = timeout
        # Shared across worker threads, so no Session unless one is injected
        self.session = session

    def fetch_conditions(self, location: Location) -> WeatherConditions:
        """Current conditions and tomorrow's forecast for a supported city."""
        if not self.api_key:
            raise ExternalServiceFailure("weather", "WEATHER_API_KEY is not configured")

        loc = load_climate_table().get(location)
        data = self._get_json(
            self.api_url,
            {"key": self.api_key, "q": f"{loc.latitude},{loc.longitude}", "days": 2},
        )

        try:
            cur = data["current"]
            current = WeatherSnapshot(
                temperature_c=float(cur["temp_c"]),
                cloud_cover_percent=float(cur["cloud"]),
                uv_index=float(cur["uv"]),
            )
            days = data["forecast"]["forecastday"]
            # Tomorrow when available, otherwise the rest of today
            day = days[1] if len(days) > 1 else days[0]
            hours = day.get("hour") or []
            if hours:
                cloud = sum(float(h["cloud"]) for h in hours) / len(hours)
            else:
                cloud = current.cloud_cover_percent
            forecast = WeatherSnapshot(
                temperature_c=float(day["day"]["avgtemp_c"]),
                cloud_cover_percent=cloud,
                uv_index=float(day["day"]["uv"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.error("Could not parse weather response for %s: %s", loc.name, exc)
            raise ExternalServiceFailure("weather", f"unexpected response structure: {exc}")

        return WeatherConditions(location=Location(loc.name), current=current, forecast=forecast)

    def fetch_historical_irradiance(self, latitude: float, longitude: float) -> list[float]:
        """
        Long-term monthly average irradiation in Wh/m²/day, January first.
        """
        data = self._get_json(
            self.power_url,
            {
                "parameters": _POWER_PARAMETER,
                "community": "RE",
                "latitude": latitude,
                "longitude": longitude,
                "format": "JSON",
            },
        )

        try:
            monthly = data["properties"]["parameter"][_POWER_PARAMETER]
            values_kwh = [float(monthly[key]) for key in _MONTH_KEYS]
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Could not parse NASA POWER response: %s", exc)
            raise ExternalServiceFailure("nasa-power", f"unexpected response structure: {exc}")

        if any(not math.isfinite(v) or v == _POWER_FILL_VALUE or v < 0 for v in values_kwh):
            raise ExternalServiceFailure("nasa-power", "response contains missing monthly values")

        return [v * 1000.0 for v in values_kwh]

    def _get_json(self, url: str, params: dict) -> dict:
        service = "nasa-power" if url == self.power_url else "weather"
        try:
            http = self.session if self.session is not None else requests
            response = http.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.Timeout as exc:
            logger.error("%s request timed out: %s", service, exc)
            raise ExternalServiceFailure(service, f"request timed out after {self.timeout}s")
        except requests.RequestException as exc:
            logger.error("%s request failed: %s", service, exc)
            raise ExternalServiceFailure(service, f"request failed: {exc}")
        except ValueError as exc:
            logger.error("%s returned invalid JSON: %s", service, exc)
            raise ExternalServiceFailure(service, "response is not valid JSON")
