"""
API route for off-grid battery bank sizing.
"""

from fastapi import APIRouter, HTTPException

from solarjo.engine.battery import size_battery_bank
from solarjo.models.battery import BatteryBankInput, BatteryBankResult

router = APIRouter(prefix="/api/v1", tags=["battery-bank"])


@router.post("/battery-bank", response_model=BatteryBankResult)
async def battery_bank(data: BatteryBankInput) -> BatteryBankResult:
    """
    Battery count and arrangement for a daily load, either given directly
    or summed from a list of appliances.
    """
    try:
        return size_battery_bank(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
