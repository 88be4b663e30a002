"""
Pydantic models for the string configuration solver.
"""

from typing import Optional

from pydantic import BaseModel

from solarjo.config import DEFAULT_MAX_INPUT_CURRENT_A, DEFAULT_MAX_INPUT_VOLTAGE_V
from solarjo.models.explanation import Explanation


class EquipmentLimits(BaseModel):
    """Inverter/charge controller DC input ratings."""
    max_input_voltage_v: float = DEFAULT_MAX_INPUT_VOLTAGE_V
    max_input_current_a: float = DEFAULT_MAX_INPUT_CURRENT_A


class StringConfigInput(BaseModel):
    panel_voltage_v: float
    panel_current_a: float
    desired_system_voltage_v: float
    desired_system_current_a: float
    limits: EquipmentLimits = EquipmentLimits()


class StringConfigResult(BaseModel):
    """Series/parallel arrangement of identical panels."""
    panels_per_string: int
    parallel_strings: int
    total_panels: int
    string_voltage_v: float      # panels_per_string × panel voltage
    array_current_a: float       # parallel_strings × panel current
    voltage_limited: bool        # clamped by max input voltage
    current_limited: bool        # clamped by max input current
    limits: EquipmentLimits
    explanation: Optional[Explanation] = None
