"""
Live performance simulation from current weather.

The weather feed only carries irradiance proxies, so plane irradiance is
estimated:
  G_clear = min(UV × 100, 1000) W/m²
  G       = G_clear × (1 − 0.75 × (cloud/100)^3.4)       (Kasten–Czeplak)
  T_cell  = T_amb + (NOCT − 20) / 800 × G
  P       = kWp × 1000 × G/1000 × (1 − loss/100) × (1 + γ (T_cell − 25))
with NOCT = 45 °C and γ = −0.4 %/°C. Output is floored at zero.
"""

from datetime import datetime, timedelta
from typing import Optional

from solarjo.config import (
    MAX_CLEAR_SKY_IRRADIANCE,
    MAX_SYSTEM_LOSS_PERCENT,
    MIN_SYSTEM_LOSS_PERCENT,
    NOCT_C,
    POWER_TEMP_COEFFICIENT,
    STC_CELL_TEMP_C,
    UV_INDEX_TO_IRRADIANCE,
)
from solarjo.engine.weather import WeatherClient
from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.simulation import SimulationDataPoint, SimulationInput, SimulationResult
from solarjo.models.weather import WeatherSnapshot


def estimate_irradiance(uv_index: float, cloud_cover_percent: float) -> float:
    clear_sky = min(max(uv_index, 0.0) * UV_INDEX_TO_IRRADIANCE, MAX_CLEAR_SKY_IRRADIANCE)
    cloud = min(max(cloud_cover_percent, 0.0), 100.0) / 100.0
    return clear_sky * (1.0 - 0.75 * cloud ** 3.4)


def cell_temperature(ambient_c: float, irradiance: float) -> float:
    return ambient_c + (NOCT_C - 20.0) / 800.0 * irradiance


def simulate_point(
    system_size_kw: float,
    system_loss_percent: float,
    snapshot: WeatherSnapshot,
    time: datetime,
) -> SimulationDataPoint:
    """Instantaneous array output for one weather snapshot."""
    g = estimate_irradiance(snapshot.uv_index, snapshot.cloud_cover_percent)
    t_cell = cell_temperature(snapshot.temperature_c, g)
    temp_factor = 1.0 + POWER_TEMP_COEFFICIENT * (t_cell - STC_CELL_TEMP_C)
    power = system_size_kw * 1000.0 * (g / 1000.0) * (1.0 - system_loss_percent / 100.0) * temp_factor

    return SimulationDataPoint(
        time=time,
        solar_irradiance_w_m2=round(g, 1),
        temperature_c=round(snapshot.temperature_c, 1),
        cell_temperature_c=round(t_cell, 1),
        cloud_cover_percent=round(snapshot.cloud_cover_percent, 1),
        output_power_w=round(max(power, 0.0), 1),
    )


def run_live_simulation(
    data: SimulationInput,
    weather: Optional[WeatherClient] = None,
    now: Optional[datetime] = None,
) -> SimulationResult:
    """
    Fetch conditions for the location and simulate now and tomorrow.

    Weather failures propagate as ExternalServiceFailure.
    """
    require_finite(
        system_size_kw=data.system_size_kw,
        system_loss_percent=data.system_loss_percent,
        panel_tilt_deg=data.panel_tilt_deg,
        panel_azimuth_deg=data.panel_azimuth_deg,
    )
    if data.system_size_kw <= 0:
        raise InvalidInput("system_size_kw must be positive")
    if not MIN_SYSTEM_LOSS_PERCENT <= data.system_loss_percent <= MAX_SYSTEM_LOSS_PERCENT:
        raise InvalidInput("system_loss_percent must be between 0 and 99")
    if not 0.0 <= data.panel_tilt_deg <= 90.0:
        raise InvalidInput("panel_tilt_deg must be between 0 and 90")
    if not 0.0 <= data.panel_azimuth_deg <= 360.0:
        raise InvalidInput("panel_azimuth_deg must be between 0 and 360")

    client = weather if weather is not None else WeatherClient()
    conditions = client.fetch_conditions(data.location)
    t = now if now is not None else datetime.now()

    return SimulationResult(
        location=data.location,
        current=simulate_point(data.system_size_kw, data.system_loss_percent, conditions.current, t),
        forecast=simulate_point(
            data.system_size_kw, data.system_loss_percent, conditions.forecast, t + timedelta(days=1)
        ),
    )
