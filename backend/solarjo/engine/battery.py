"""
Battery bank sizing.

  load_kWh   = Σ W × qty × h / 1000   (appliance list, if it yields a positive load)
  bank_kWh   = load_kWh × autonomy_days / DoD
  bank_Ah    = bank_kWh × 1000 / V_system
  series     = round(V_system / V_battery)
  parallel   = ceil(bank_Ah / Ah_battery)
"""

import math

from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.battery import BatteryBankInput, BatteryBankResult


def appliance_load_kwh(ci: BatteryBankInput) -> float:
    return sum(a.power_w * a.quantity * a.hours_per_day for a in ci.appliances) / 1000.0


def size_battery_bank(ci: BatteryBankInput) -> BatteryBankResult:
    require_finite(
        daily_load_kwh=ci.daily_load_kwh,
        autonomy_days=ci.autonomy_days,
        depth_of_discharge_percent=ci.depth_of_discharge_percent,
        battery_voltage_v=ci.battery_voltage_v,
        battery_capacity_ah=ci.battery_capacity_ah,
        system_voltage_v=ci.system_voltage_v,
    )
    for a in ci.appliances:
        require_finite(power_w=a.power_w, hours_per_day=a.hours_per_day)
    if ci.autonomy_days <= 0:
        raise InvalidInput("autonomy_days must be positive")
    if not 0.0 < ci.depth_of_discharge_percent <= 100.0:
        raise InvalidInput("depth_of_discharge_percent must be in (0, 100]")
    if ci.battery_voltage_v <= 0 or ci.system_voltage_v <= 0:
        raise InvalidInput("battery and system voltages must be positive")
    if ci.battery_capacity_ah <= 0:
        raise InvalidInput("battery_capacity_ah must be positive")
    if any(a.power_w < 0 or a.quantity < 0 or a.hours_per_day < 0 for a in ci.appliances):
        raise InvalidInput("appliance power, quantity and hours must be non-negative")

    load = appliance_load_kwh(ci)
    if load <= 0:
        load = ci.daily_load_kwh
    if load <= 0:
        raise InvalidInput("daily_load_kwh must be positive when no appliance load is given")

    bank_kwh = load * ci.autonomy_days / (ci.depth_of_discharge_percent / 100.0)
    bank_ah = bank_kwh * 1000.0 / ci.system_voltage_v
    series = max(1, round(ci.system_voltage_v / ci.battery_voltage_v))
    parallel = math.ceil(bank_ah / ci.battery_capacity_ah)

    return BatteryBankResult(
        daily_load_kwh=load,
        required_bank_energy_kwh=bank_kwh,
        required_bank_capacity_ah=bank_ah,
        batteries_in_series=series,
        parallel_strings=parallel,
        total_batteries=series * parallel,
    )
