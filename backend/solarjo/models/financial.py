"""
Pydantic models for the production & financial viability model.

Provides models for:
  - SystemSpec: the installed DC array being evaluated
  - Payback: tagged finite/unreachable payback period
  - Monthly production breakdown, cash flow and sensitivity analysis
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from solarjo.config import DEFAULT_DEGRADATION_RATE_PERCENT, Location
from solarjo.models.explanation import Explanation


class SystemSpec(BaseModel):
    """Fixed installed DC array."""
    model_config = ConfigDict(frozen=True)

    size_kw: float                   # kWp nameplate
    system_loss_percent: float = 15.0
    tilt_deg: float = 30.0
    azimuth_deg: float = 180.0       # 180 = south


class FinitePayback(BaseModel):
    kind: Literal["finite"] = "finite"
    months: int

    @property
    def years(self) -> int:
        return self.months // 12

    @property
    def remaining_months(self) -> int:
        return self.months % 12


class UnreachablePayback(BaseModel):
    """Annual revenue is zero: the investment is never recovered."""
    kind: Literal["unreachable"] = "unreachable"


Payback = Annotated[Union[FinitePayback, UnreachablePayback], Field(discriminator="kind")]


class MonthlyBreakdownEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    sun_hours: float         # kWh/m²/day
    production_kwh: float
    revenue: float


class CashFlowPoint(BaseModel):
    year: int
    cash_flow: float         # cumulative, year 0 = -investment


class SensitivityCase(BaseModel):
    payback_period: Payback
    net_profit_25_years: float


class SensitivityPair(BaseModel):
    lower: SensitivityCase
    higher: SensitivityCase


class SensitivityAnalysis(BaseModel):
    cost: SensitivityPair    # cost per kW -10% / +10%
    price: SensitivityPair   # kWh price -10% / +10%


class FinancialViabilityInput(BaseModel):
    """Input for the financial viability endpoint."""
    system: SystemSpec
    location: Location = Location.AMMAN
    cost_per_kw: float = 700.0       # JOD per kWp installed
    kwh_price: float = 0.12          # JOD per kWh
    degradation_rate_percent: float = DEFAULT_DEGRADATION_RATE_PERCENT
    use_historical_data: bool = False


class FinancialViabilityResult(BaseModel):
    """Result of the production & financial viability model."""
    location: str
    total_investment: float
    total_annual_production: float   # kWh, first year
    annual_revenue: float            # first year
    payback_period: Payback
    net_profit_25_years: float
    monthly_breakdown: list[MonthlyBreakdownEntry]
    cash_flow_analysis: list[CashFlowPoint]
    sensitivity_analysis: SensitivityAnalysis
    sun_hours_source: Literal["climate_table", "historical", "custom"] = "climate_table"
    warnings: list[str] = Field(default_factory=list)
    explanation: Optional[Explanation] = None
