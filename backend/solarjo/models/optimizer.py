"""
Pydantic models for the design optimizer.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from solarjo.config import Location
from solarjo.models.explanation import Explanation
from solarjo.models.financial import FinancialViabilityResult
from solarjo.models.string_config import EquipmentLimits, StringConfigResult
from solarjo.models.wire_sizing import WireSizingResult


class LimitingFactor(str, Enum):
    CONSUMPTION = "consumption"
    AREA = "area"


class DesignOptimizerInput(BaseModel):
    monthly_consumption_kwh: float
    surface_area_m2: float
    location: Location = Location.AMMAN
    system_loss_percent: float = 15.0
    panel_wattage: float = 550.0
    panel_voltage_v: float = 41.7        # Vmp
    panel_current_a: float = 13.2        # Imp
    cost_per_watt: float = 0.7           # JOD/W
    kwh_price: float = 0.12              # JOD/kWh
    dc_cable_length_m: Optional[float] = None
    max_voltage_drop_percent: float = 2.0
    limits: EquipmentLimits = EquipmentLimits()


class PanelConfig(BaseModel):
    panel_count: int
    panel_wattage: float
    total_dc_power_kw: float
    required_area_m2: float
    tilt_deg: float
    azimuth_deg: float


class InverterConfig(BaseModel):
    recommended_size_kw: float
    phase: str


class DesignOptimizerResult(BaseModel):
    limiting_factor: LimitingFactor
    consumption_based_size_kw: float
    area_based_size_kw: float
    panel_config: PanelConfig
    inverter_config: InverterConfig
    wiring: StringConfigResult
    dc_cable: Optional[WireSizingResult] = None
    financial: FinancialViabilityResult
    warnings: list[str] = Field(default_factory=list)
    explanation: Optional[Explanation] = None
