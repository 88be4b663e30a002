"""
Pydantic models for off-grid/hybrid battery bank design.
"""

from pydantic import BaseModel, Field


class Appliance(BaseModel):
    name: str = ""
    power_w: float
    quantity: int = 1
    hours_per_day: float


class BatteryBankInput(BaseModel):
    daily_load_kwh: float = 0.0
    autonomy_days: float = 1.0
    depth_of_discharge_percent: float = 80.0
    battery_voltage_v: float = 12.0
    battery_capacity_ah: float = 200.0
    system_voltage_v: float = 48.0
    appliances: list[Appliance] = Field(default_factory=list)


class BatteryBankResult(BaseModel):
    daily_load_kwh: float            # load actually used for sizing
    required_bank_energy_kwh: float
    required_bank_capacity_ah: float
    batteries_in_series: int
    parallel_strings: int
    total_batteries: int
