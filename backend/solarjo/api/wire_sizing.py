"""
API routes for DC wire sizing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from solarjo.api.dependencies import get_explanation_provider
from solarjo.config import Locale
from solarjo.engine.explanation import ExplanationProvider, with_explanation
from solarjo.engine.wire_sizing import compute_wire_size, standard_copper_table
from solarjo.errors import SizeUnavailable
from solarjo.models.wire_sizing import ConductorTable, WireSizingInput, WireSizingResult

router = APIRouter(prefix="/api/v1", tags=["wire-sizing"])


@router.get("/wire-sizing/conductors", response_model=ConductorTable)
async def conductors() -> ConductorTable:
    """The standard conductor table used for sizing."""
    return standard_copper_table()


@router.post("/wire-sizing", response_model=WireSizingResult)
def wire_sizing(
    data: WireSizingInput,
    explain: bool = Query(False),
    locale: Locale = Query(Locale.EN),
    provider: Optional[ExplanationProvider] = Depends(get_explanation_provider),
) -> WireSizingResult:
    """
    Smallest standard copper cross-section that keeps the DC voltage drop
    within the allowed percentage.
    """
    try:
        result = compute_wire_size(
            data.current_a,
            data.voltage_v,
            data.distance_m,
            data.max_voltage_drop_percent,
        )
    except SizeUnavailable as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "size_unavailable", "message": str(e), "required_area_mm2": e.required_area_mm2},
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    if explain:
        facts = result.model_dump(mode="json", exclude={"explanation"})
        result = with_explanation(result, provider, "wire_sizing", facts, locale)
    return result
