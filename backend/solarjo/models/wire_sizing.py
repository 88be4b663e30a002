"""
Pydantic models for DC wire sizing.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from solarjo.models.explanation import Explanation


class Conductor(BaseModel):
    model_config = ConfigDict(frozen=True)

    size_mm2: float
    resistance_ohm_per_m: float


class ConductorTable(BaseModel):
    """Standard cross-sections, kept smallest first whatever the input order."""
    model_config = ConfigDict(frozen=True)

    material: str
    conductors: tuple[Conductor, ...]

    @field_validator("conductors")
    @classmethod
    def _ascending(cls, v: tuple[Conductor, ...]) -> tuple[Conductor, ...]:
        return tuple(sorted(v, key=lambda c: c.size_mm2))


class WireSizingInput(BaseModel):
    current_a: float
    voltage_v: float
    distance_m: float                  # one-way run length
    max_voltage_drop_percent: float = 2.0


class WireSizingResult(BaseModel):
    recommended_wire_size_mm2: float
    resistance_ohm_per_m: float
    actual_voltage_drop_v: float
    actual_voltage_drop_percent: float
    max_allowed_voltage_drop_v: float
    power_loss_w: float
    explanation: Optional[Explanation] = None
