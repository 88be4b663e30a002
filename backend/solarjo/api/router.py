"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from solarjo.api.panels import router as panels_router
from solarjo.api.financial import router as financial_router
from solarjo.api.string_config import router as string_config_router
from solarjo.api.wire_sizing import router as wire_sizing_router
from solarjo.api.climate import router as climate_router
from solarjo.api.area import router as area_router
from solarjo.api.inverter import router as inverter_router
from solarjo.api.battery import router as battery_router
from solarjo.api.optimizer import router as optimizer_router
from solarjo.api.simulation import router as simulation_router
from solarjo.api.weather import router as weather_router
from solarjo.api.report import router as report_router
from solarjo.api.projects import router as projects_router

router = APIRouter()
router.include_router(panels_router)
router.include_router(financial_router)
router.include_router(string_config_router)
router.include_router(wire_sizing_router)
router.include_router(climate_router)
router.include_router(area_router)
router.include_router(inverter_router)
router.include_router(battery_router)
router.include_router(optimizer_router)
router.include_router(simulation_router)
router.include_router(weather_router)
router.include_router(report_router)
router.include_router(projects_router)
