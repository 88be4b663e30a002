"""
API route for the live performance simulation.
"""

from fastapi import APIRouter, Depends, HTTPException

from solarjo.api.dependencies import get_weather_client
from solarjo.engine.simulation import run_live_simulation
from solarjo.engine.weather import WeatherClient
from solarjo.errors import ExternalServiceFailure
from solarjo.models.simulation import SimulationInput, SimulationResult

router = APIRouter(prefix="/api/v1", tags=["simulation"])


@router.post("/live-simulation", response_model=SimulationResult)
def live_simulation(
    data: SimulationInput,
    weather: WeatherClient = Depends(get_weather_client),
) -> SimulationResult:
    """Estimated array output right now and for tomorrow's forecast."""
    try:
        return run_live_simulation(data, weather)
    except ExternalServiceFailure as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
