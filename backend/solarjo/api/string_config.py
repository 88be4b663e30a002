"""
API routes for the string configuration solver.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from solarjo.api.dependencies import get_explanation_provider
from solarjo.config import Locale
from solarjo.engine.explanation import ExplanationProvider, with_explanation
from solarjo.engine.string_config import solve_string_configuration
from solarjo.models.string_config import StringConfigInput, StringConfigResult

router = APIRouter(prefix="/api/v1", tags=["string-configuration"])


@router.post("/string-configuration", response_model=StringConfigResult)
def string_configuration(
    data: StringConfigInput,
    explain: bool = Query(False),
    locale: Locale = Query(Locale.EN),
    provider: Optional[ExplanationProvider] = Depends(get_explanation_provider),
) -> StringConfigResult:
    """
    Panels per string and parallel strings for a target system voltage and
    current, within the inverter's input ratings.
    """
    try:
        result = solve_string_configuration(
            data.panel_voltage_v,
            data.panel_current_a,
            data.desired_system_voltage_v,
            data.desired_system_current_a,
            data.limits,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    if explain:
        facts = result.model_dump(mode="json", exclude={"explanation", "limits"})
        result = with_explanation(result, provider, "string_configuration", facts, locale)
    return result
