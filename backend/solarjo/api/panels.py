"""
API routes for the panel-count-from-consumption calculator.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from solarjo.api.dependencies import get_explanation_provider
from solarjo.config import Locale
from solarjo.engine.explanation import ExplanationProvider, with_explanation
from solarjo.engine.panels import compute_panels_from_consumption
from solarjo.models.panels import PanelCountInput, PanelCountResult

router = APIRouter(prefix="/api/v1", tags=["panels"])


@router.post("/panels/from-consumption", response_model=PanelCountResult)
def panels_from_consumption(
    data: PanelCountInput,
    explain: bool = Query(False),
    locale: Locale = Query(Locale.EN),
    provider: Optional[ExplanationProvider] = Depends(get_explanation_provider),
) -> PanelCountResult:
    """Number of panels needed to cover a monthly electricity bill."""
    try:
        result = compute_panels_from_consumption(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    if explain:
        facts = result.model_dump(mode="json", exclude={"explanation"})
        result = with_explanation(result, provider, "panel_count", facts, locale)
    return result
