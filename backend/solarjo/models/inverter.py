"""
Pydantic models for grid-tied inverter sizing.
"""

from enum import Enum

from pydantic import BaseModel


class GridPhase(str, Enum):
    SINGLE = "single"
    THREE = "three"


class InverterSizingInput(BaseModel):
    total_dc_power_kw: float
    max_voc_v: float         # array open-circuit voltage at coldest temperature
    max_isc_a: float         # array short-circuit current
    grid_phase: GridPhase = GridPhase.SINGLE


class InverterSizingResult(BaseModel):
    min_inverter_size_kw: float
    max_inverter_size_kw: float
    required_max_input_voltage_v: float
    required_max_input_current_a: float
    grid_phase: GridPhase
