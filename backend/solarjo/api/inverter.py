"""
API route for inverter sizing.
"""

from fastapi import APIRouter, HTTPException

from solarjo.engine.inverter import size_inverter
from solarjo.models.inverter import InverterSizingInput, InverterSizingResult

router = APIRouter(prefix="/api/v1", tags=["inverter-sizing"])


@router.post("/inverter-sizing", response_model=InverterSizingResult)
async def inverter_sizing(data: InverterSizingInput) -> InverterSizingResult:
    try:
        return size_inverter(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
