"""
API route for the design optimizer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from solarjo.api.dependencies import get_explanation_provider
from solarjo.config import Locale
from solarjo.engine.explanation import ExplanationProvider, with_explanation
from solarjo.engine.optimizer import optimize_design
from solarjo.models.optimizer import DesignOptimizerInput, DesignOptimizerResult

router = APIRouter(prefix="/api/v1", tags=["design-optimizer"])


@router.post("/design-optimizer", response_model=DesignOptimizerResult)
def design_optimizer(
    data: DesignOptimizerInput,
    explain: bool = Query(False),
    locale: Locale = Query(Locale.EN),
    provider: Optional[ExplanationProvider] = Depends(get_explanation_provider),
) -> DesignOptimizerResult:
    """
    Full system design from monthly consumption and available roof area:
    panel count, inverter, string layout, optional DC cable and finances.
    """
    try:
        result = optimize_design(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    if explain:
        facts = {
            "limiting_factor": result.limiting_factor.value,
            "panel_count": result.panel_config.panel_count,
            "total_dc_power": result.panel_config.total_dc_power_kw,
            "required_area": result.panel_config.required_area_m2,
            "monthly_consumption": data.monthly_consumption_kwh,
            "surface_area": data.surface_area_m2,
        }
        result = with_explanation(result, provider, "design_optimizer", facts, locale)
    return result
