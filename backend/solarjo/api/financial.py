"""
API routes for the production & financial viability model.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from solarjo.api.dependencies import get_explanation_provider, get_weather_client
from solarjo.config import Locale
from solarjo.engine.explanation import ExplanationProvider, with_explanation
from solarjo.engine.financial import evaluate_financial_viability, format_payback
from solarjo.engine.weather import WeatherClient
from solarjo.models.financial import FinancialViabilityInput, FinancialViabilityResult

router = APIRouter(prefix="/api/v1", tags=["financial"])


def financial_facts(result: FinancialViabilityResult) -> dict:
    return {
        "location": result.location,
        "total_investment": result.total_investment,
        "total_annual_production": result.total_annual_production,
        "annual_revenue": result.annual_revenue,
        "payback": format_payback(result),
        "net_profit_25_years": result.net_profit_25_years,
    }


@router.post("/financial-viability", response_model=FinancialViabilityResult)
def financial_viability(
    data: FinancialViabilityInput,
    explain: bool = Query(False),
    locale: Locale = Query(Locale.EN),
    weather: WeatherClient = Depends(get_weather_client),
    provider: Optional[ExplanationProvider] = Depends(get_explanation_provider),
) -> FinancialViabilityResult:
    """
    Twelve-month production and revenue breakdown with payback, 25-year
    profit, cash flow projection and ±10% sensitivity.

    Set ``use_historical_data`` to base production on long-term satellite
    irradiance instead of the built-in climate table.
    """
    try:
        result = evaluate_financial_viability(data, weather)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    if explain:
        result = with_explanation(result, provider, "financial_viability", financial_facts(result), locale)
    return result
