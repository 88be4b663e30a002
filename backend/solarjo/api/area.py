"""
API route for the land-area production estimate.
"""

from fastapi import APIRouter, HTTPException

from solarjo.engine.area import calculate_area_production
from solarjo.models.area import AreaProductionInput, AreaProductionResult

router = APIRouter(prefix="/api/v1", tags=["area-production"])


@router.post("/area-production", response_model=AreaProductionResult)
async def area_production(data: AreaProductionInput) -> AreaProductionResult:
    """How many panels fit on a plot and what they produce."""
    try:
        return calculate_area_production(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
