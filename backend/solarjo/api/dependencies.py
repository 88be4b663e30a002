"""
Shared FastAPI dependencies for the external collaborators.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Optional

from solarjo.engine.explanation import ExplanationProvider, default_provider
from solarjo.engine.projects import InMemoryProjectStore, ProjectStore
from solarjo.engine.weather import WeatherClient


@lru_cache(maxsize=1)
def get_weather_client() -> WeatherClient:
    return WeatherClient()


@lru_cache(maxsize=1)
def get_explanation_provider() -> Optional[ExplanationProvider]:
    return default_provider()


@lru_cache(maxsize=1)
def get_project_store() -> ProjectStore:
    return InMemoryProjectStore()
