"""
Production & financial viability engine.

Monthly model (fixed calendar, no leap years):
  daily_kWh(m)   = size_kW × sun_hours(m) × (1 − loss/100)
  monthly_kWh(m) = daily_kWh(m) × days(m)
  revenue(m)     = monthly_kWh(m) × price

Aggregates:
  investment     = size_kW × cost_per_kW
  payback_months = ceil(investment / annual_revenue × 12), unreachable if revenue = 0
  profit_25y     = annual_revenue × 25 − investment

The cash flow projection additionally applies annual panel degradation.
"""

import logging
import math
from typing import Optional, Sequence

from solarjo.config import (
    DAYS_IN_MONTH,
    MAX_DEGRADATION_RATE_PERCENT,
    MAX_SYSTEM_LOSS_PERCENT,
    MIN_SYSTEM_LOSS_PERCENT,
    MONTH_NAMES,
    PROJECT_LIFETIME_YEARS,
    SENSITIVITY_DELTA,
    DEFAULT_DEGRADATION_RATE_PERCENT,
)
from solarjo.engine.climate import load_climate_table, resolve_sun_hours, sun_hours_from_irradiance
from solarjo.engine.weather import WeatherClient
from solarjo.errors import ExternalServiceFailure, InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.climate import ClimateTable
from solarjo.models.financial import (
    CashFlowPoint,
    FinancialViabilityInput,
    FinancialViabilityResult,
    FinitePayback,
    MonthlyBreakdownEntry,
    Payback,
    SensitivityAnalysis,
    SensitivityCase,
    SensitivityPair,
    SystemSpec,
    UnreachablePayback,
)

logger = logging.getLogger(__name__)


def validate_system_spec(spec: SystemSpec) -> None:
    require_finite(
        size_kw=spec.size_kw,
        system_loss_percent=spec.system_loss_percent,
        tilt_deg=spec.tilt_deg,
        azimuth_deg=spec.azimuth_deg,
    )
    if spec.size_kw <= 0:
        raise InvalidInput("size_kw must be positive")
    if not MIN_SYSTEM_LOSS_PERCENT <= spec.system_loss_percent <= MAX_SYSTEM_LOSS_PERCENT:
        raise InvalidInput("system_loss_percent must be between 0 and 99")
    if not 0.0 <= spec.tilt_deg <= 90.0:
        raise InvalidInput("tilt_deg must be between 0 and 90")
    if not 0.0 <= spec.azimuth_deg <= 360.0:
        raise InvalidInput("azimuth_deg must be between 0 and 360")


def payback_period(total_investment: float, annual_revenue: float) -> Payback:
    """Months until cumulative revenue covers the investment, rounded up."""
    if annual_revenue <= 0:
        return UnreachablePayback()
    return FinitePayback(months=math.ceil(total_investment / annual_revenue * 12))


def net_profit(total_investment: float, annual_revenue: float) -> float:
    return annual_revenue * PROJECT_LIFETIME_YEARS - total_investment


def monthly_breakdown(
    size_kw: float,
    system_loss_percent: float,
    sun_hours: Sequence[float],
    kwh_price: float,
) -> list[MonthlyBreakdownEntry]:
    """Twelve monthly production/revenue entries in calendar order."""
    loss_factor = 1.0 - system_loss_percent / 100.0
    entries = []
    for name, days, hours in zip(MONTH_NAMES, DAYS_IN_MONTH, sun_hours):
        daily_kwh = size_kw * hours * loss_factor
        production = daily_kwh * days
        entries.append(MonthlyBreakdownEntry(
            month=name,
            sun_hours=hours,
            production_kwh=production,
            revenue=production * kwh_price,
        ))
    return entries


def cash_flow_projection(
    total_investment: float,
    annual_revenue: float,
    degradation_rate_percent: float,
    years: int = PROJECT_LIFETIME_YEARS,
) -> list[CashFlowPoint]:
    """Cumulative cash flow per year, revenue shrinking by the degradation rate."""
    points = [CashFlowPoint(year=0, cash_flow=-total_investment)]
    cumulative = -total_investment
    retained = 1.0 - degradation_rate_percent / 100.0
    for year in range(1, years + 1):
        cumulative += annual_revenue * retained ** (year - 1)
        points.append(CashFlowPoint(year=year, cash_flow=cumulative))
    return points


def sensitivity_analysis(
    size_kw: float,
    annual_production: float,
    cost_per_kw: float,
    kwh_price: float,
) -> SensitivityAnalysis:
    """Payback and 25-year profit with cost and price moved by ±10%."""

    def case(cost: float, price: float) -> SensitivityCase:
        investment = size_kw * cost
        revenue = annual_production * price
        return SensitivityCase(
            payback_period=payback_period(investment, revenue),
            net_profit_25_years=net_profit(investment, revenue),
        )

    lo, hi = 1.0 - SENSITIVITY_DELTA, 1.0 + SENSITIVITY_DELTA
    return SensitivityAnalysis(
        cost=SensitivityPair(
            lower=case(cost_per_kw * lo, kwh_price),
            higher=case(cost_per_kw * hi, kwh_price),
        ),
        price=SensitivityPair(
            lower=case(cost_per_kw, kwh_price * lo),
            higher=case(cost_per_kw, kwh_price * hi),
        ),
    )


def compute_financial_viability(
    spec: SystemSpec,
    location: str,
    cost_per_kw: float,
    kwh_price: float,
    *,
    degradation_rate_percent: float = DEFAULT_DEGRADATION_RATE_PERCENT,
    climate: Optional[ClimateTable] = None,
    sun_hours: Optional[Sequence[float]] = None,
) -> FinancialViabilityResult:
    """
    Twelve-month production/revenue breakdown plus payback and ROI summary.

    ``sun_hours`` overrides the climate table (historical or custom data);
    the location must still be known.
    """
    validate_system_spec(spec)
    require_finite(
        cost_per_kw=cost_per_kw,
        kwh_price=kwh_price,
        degradation_rate_percent=degradation_rate_percent,
    )
    if cost_per_kw <= 0:
        raise InvalidInput("cost_per_kw must be positive")
    if kwh_price <= 0:
        raise InvalidInput("kwh_price must be positive")
    if not 0.0 <= degradation_rate_percent <= MAX_DEGRADATION_RATE_PERCENT:
        raise InvalidInput("degradation_rate_percent must be between 0 and 5")

    table = climate if climate is not None else load_climate_table()
    hours = resolve_sun_hours(location, table, sun_hours)
    entry = table.get(location)

    breakdown = monthly_breakdown(spec.size_kw, spec.system_loss_percent, hours, kwh_price)

    total_investment = spec.size_kw * cost_per_kw
    total_annual_production = sum(m.production_kwh for m in breakdown)
    annual_revenue = total_annual_production * kwh_price

    return FinancialViabilityResult(
        location=entry.name,
        total_investment=total_investment,
        total_annual_production=total_annual_production,
        annual_revenue=annual_revenue,
        payback_period=payback_period(total_investment, annual_revenue),
        net_profit_25_years=net_profit(total_investment, annual_revenue),
        monthly_breakdown=breakdown,
        cash_flow_analysis=cash_flow_projection(
            total_investment, annual_revenue, degradation_rate_percent
        ),
        sensitivity_analysis=sensitivity_analysis(
            spec.size_kw, total_annual_production, cost_per_kw, kwh_price
        ),
        sun_hours_source="climate_table" if sun_hours is None else "custom",
    )


def evaluate_financial_viability(
    data: FinancialViabilityInput,
    weather: Optional[WeatherClient] = None,
) -> FinancialViabilityResult:
    """
    Run the financial model, optionally on historical irradiance.

    A weather service failure falls back to the climate table and is
    reported in ``warnings``; the numeric path always completes.
    """
    kwargs = dict(
        spec=data.system,
        location=data.location,
        cost_per_kw=data.cost_per_kw,
        kwh_price=data.kwh_price,
        degradation_rate_percent=data.degradation_rate_percent,
    )

    if not data.use_historical_data:
        return compute_financial_viability(**kwargs)

    loc = load_climate_table().get(data.location)
    client = weather if weather is not None else WeatherClient()
    try:
        irradiance = client.fetch_historical_irradiance(loc.latitude, loc.longitude)
    except ExternalServiceFailure as exc:
        logger.warning("Historical irradiance unavailable for %s, using climate table: %s", loc.name, exc)
        result = compute_financial_viability(**kwargs)
        return result.model_copy(update={
            "warnings": [f"Historical irradiance unavailable ({exc}); used the built-in climate table."],
        })

    result = compute_financial_viability(**kwargs, sun_hours=sun_hours_from_irradiance(irradiance))
    return result.model_copy(update={"sun_hours_source": "historical"})


def format_payback(result: FinancialViabilityResult) -> str:
    """'N years M months', or 'More than 25 years' when not recovered in time."""
    payback = result.payback_period
    if not isinstance(payback, FinitePayback) or payback.months > PROJECT_LIFETIME_YEARS * 12:
        return f"More than {PROJECT_LIFETIME_YEARS} years"
    return f"{payback.years} years {payback.remaining_months} months"
