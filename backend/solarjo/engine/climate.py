"""
Monthly solar-resource lookup for the supported Jordanian cities.

Loads a bundled JSON table of average daily sun-hours per month, once per
process, into an immutable ClimateTable that is handed to the calculators.
"""

import json
import os
from functools import lru_cache
from typing import Optional, Sequence

from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.climate import ClimateTable, LocationClimate

# Path to the bundled climate data
_DATA_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "climate.json")


@lru_cache(maxsize=1)
def load_climate_table() -> ClimateTable:
    """Load and cache the climate table."""
    with open(_DATA_PATH, "r") as f:
        raw = json.load(f)
    return ClimateTable(
        locations=tuple(
            LocationClimate(
                name=entry["name"],
                label=entry["label"],
                latitude=entry["latitude"],
                longitude=entry["longitude"],
                sun_hours=tuple(entry["sun_hours"]),
            )
            for entry in raw
        )
    )


def resolve_sun_hours(
    location: str,
    climate: Optional[ClimateTable] = None,
    sun_hours: Optional[Sequence[float]] = None,
) -> tuple[float, ...]:
    """
    Return the 12 monthly sun-hours to use for a calculation.

    An explicit ``sun_hours`` sequence (e.g. historical irradiance) wins over
    the climate table, but the location must still be a known city.
    """
    table = climate if climate is not None else load_climate_table()
    entry = table.get(location)
    if sun_hours is None:
        return entry.sun_hours

    values = tuple(float(h) for h in sun_hours)
    require_finite(**{f"sun_hours[{i}]": h for i, h in enumerate(values)})
    if len(values) != 12:
        raise InvalidInput(f"sun_hours must have 12 monthly entries, got {len(values)}")
    if any(h < 0 for h in values):
        raise InvalidInput("sun_hours entries must be non-negative")
    return values


def sun_hours_from_irradiance(irradiance_wh: Sequence[float]) -> tuple[float, ...]:
    """Convert monthly irradiation in Wh/m²/day to sun-hours (kWh/m²/day)."""
    return tuple(value / 1000.0 for value in irradiance_wh)
