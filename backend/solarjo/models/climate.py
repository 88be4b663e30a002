"""
Pydantic models for the static monthly solar-resource table.
"""

from pydantic import BaseModel, ConfigDict, field_validator

from solarjo.errors import InvalidInput


class LocationClimate(BaseModel):
    """Coordinates and 12 monthly average daily sun-hours for one city."""
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    latitude: float
    longitude: float
    sun_hours: tuple[float, ...]   # kWh/m²/day, January first

    @field_validator("sun_hours")
    @classmethod
    def _twelve_non_negative(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        if len(v) != 12:
            raise ValueError(f"sun_hours must have 12 monthly entries, got {len(v)}")
        if any(h < 0 for h in v):
            raise ValueError("sun_hours entries must be non-negative")
        return v

    @property
    def annual_average_sun_hours(self) -> float:
        return sum(self.sun_hours) / 12.0


class ClimateTable(BaseModel):
    """Read-only lookup of LocationClimate by city name."""
    model_config = ConfigDict(frozen=True)

    locations: tuple[LocationClimate, ...]

    def names(self) -> list[str]:
        return [loc.name for loc in self.locations]

    def get(self, name: str) -> LocationClimate:
        key = getattr(name, "value", name)
        for loc in self.locations:
            if loc.name == key:
                return loc
        raise InvalidInput(
            f"Unknown location '{key}'. Supported locations: {', '.join(self.names())}."
        )
