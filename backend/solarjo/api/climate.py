"""
API routes for the monthly solar-resource table.
"""

from fastapi import APIRouter, HTTPException

from solarjo.config import Location
from solarjo.engine.climate import load_climate_table
from solarjo.models.climate import LocationClimate

router = APIRouter(prefix="/api/v1", tags=["climate"])


@router.get("/climate/locations", response_model=list[LocationClimate])
async def list_locations() -> list[LocationClimate]:
    """All supported cities with their monthly average sun-hours."""
    return list(load_climate_table().locations)


@router.get("/climate/locations/{location}", response_model=LocationClimate)
async def get_location(location: Location) -> LocationClimate:
    try:
        return load_climate_table().get(location)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
