"""
API-level tests for the calculator, weather and project endpoints.

External collaborators are replaced through ``app.dependency_overrides``.
"""

import pytest
from fastapi.testclient import TestClient

from solarjo.api.dependencies import get_explanation_provider, get_project_store, get_weather_client
from solarjo.config import Location
from solarjo.engine.explanation import ExplanationProvider
from solarjo.engine.projects import InMemoryProjectStore, ProjectStore
from solarjo.errors import ExternalServiceFailure, PersistenceFailure
from solarjo.main import app
from solarjo.models.weather import WeatherConditions, WeatherSnapshot

client = TestClient(app)


class FakeWeather:
    def __init__(self, error=None):
        self.error = error

    def fetch_conditions(self, location):
        if self.error is not None:
            raise self.error
        snapshot = WeatherSnapshot(temperature_c=25.0, cloud_cover_percent=0.0, uv_index=8.0)
        return WeatherConditions(location=location, current=snapshot, forecast=snapshot)

    def fetch_historical_irradiance(self, latitude, longitude):
        if self.error is not None:
            raise self.error
        return [5000.0] * 12


class StaticProvider(ExplanationProvider):
    def explain(self, topic, facts, locale):
        return f"{topic} explained"


class FailingProvider(ExplanationProvider):
    def explain(self, topic, facts, locale):
        raise ExternalServiceFailure("explanation", "request timed out after 15s")


class BrokenStore(ProjectStore):
    def save(self, project):
        raise PersistenceFailure("document store unavailable")

    def list_for_owner(self, owner_id):
        raise PersistenceFailure("document store unavailable")

    def delete(self, owner_id, project_id):
        raise PersistenceFailure("document store unavailable")


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "service": "solarjo"}


class TestClimateEndpoints:
    def test_list(self):
        resp = client.get("/api/v1/climate/locations")
        assert resp.status_code == 200
        assert {loc["name"] for loc in resp.json()} == {"amman", "zarqa", "irbid", "aqaba"}

    def test_get(self):
        resp = client.get("/api/v1/climate/locations/aqaba")
        assert resp.status_code == 200
        assert len(resp.json()["sun_hours"]) == 12

    def test_unknown(self):
        resp = client.get("/api/v1/climate/locations/petra")
        assert resp.status_code == 422


class TestPanelsEndpoint:
    def test_reference(self):
        resp = client.post("/api/v1/panels/from-consumption", json={
            "monthly_bill": 240, "kwh_price": 0.12, "sun_hours": 5.5,
            "panel_wattage": 450, "system_loss_percent": 15,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_kwh"] == pytest.approx(2000.0)
        assert data["required_panels"] == 32
        assert data["explanation"] is None

    def test_invalid(self):
        resp = client.post("/api/v1/panels/from-consumption", json={"monthly_bill": 240, "kwh_price": 0})
        assert resp.status_code == 422

    def test_explanation_fallback_keeps_numbers(self):
        app.dependency_overrides[get_explanation_provider] = lambda: FailingProvider()
        body = {"monthly_bill": 240, "kwh_price": 0.12}
        plain = client.post("/api/v1/panels/from-consumption", json=body).json()
        explained = client.post("/api/v1/panels/from-consumption?explain=true", json=body).json()
        assert explained["explanation"]["source"] == "fallback"
        assert "32 panels" in explained["explanation"]["text"]
        explained.pop("explanation")
        plain.pop("explanation")
        assert explained == plain


class TestFinancialEndpoint:
    def test_reference(self):
        resp = client.post("/api/v1/financial-viability", json={
            "system": {"size_kw": 5, "system_loss_percent": 15},
            "location": "amman", "cost_per_kw": 700, "kwh_price": 0.12,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_investment"] == pytest.approx(3500.0)
        assert data["total_annual_production"] == pytest.approx(8866.775)
        assert data["payback_period"] == {"kind": "finite", "months": 40}
        assert len(data["monthly_breakdown"]) == 12
        assert len(data["cash_flow_analysis"]) == 26

    def test_unknown_location(self):
        resp = client.post("/api/v1/financial-viability", json={
            "system": {"size_kw": 5}, "location": "petra",
        })
        assert resp.status_code == 422

    def test_invalid_size(self):
        resp = client.post("/api/v1/financial-viability", json={"system": {"size_kw": 0}})
        assert resp.status_code == 422

    def test_historical_fallback(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather(
            error=ExternalServiceFailure("nasa-power", "request timed out after 10s"),
        )
        resp = client.post("/api/v1/financial-viability", json={
            "system": {"size_kw": 5}, "use_historical_data": True,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["sun_hours_source"] == "climate_table"
        assert len(data["warnings"]) == 1

    def test_explanation_from_service(self):
        app.dependency_overrides[get_explanation_provider] = lambda: StaticProvider()
        resp = client.post("/api/v1/financial-viability?explain=true&locale=ar", json={"system": {"size_kw": 5}})
        assert resp.status_code == 200
        assert resp.json()["explanation"] == {"text": "financial_viability explained", "source": "service"}


class TestStringConfigEndpoint:
    def test_reference(self):
        resp = client.post("/api/v1/string-configuration", json={
            "panel_voltage_v": 24, "panel_current_a": 9.5,
            "desired_system_voltage_v": 600, "desired_system_current_a": 38,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["panels_per_string"] == 25
        assert data["parallel_strings"] == 4
        assert data["limits"] == {"max_input_voltage_v": 1000.0, "max_input_current_a": 50.0}

    def test_single_panel_over_limit(self):
        resp = client.post("/api/v1/string-configuration", json={
            "panel_voltage_v": 24, "panel_current_a": 9.5,
            "desired_system_voltage_v": 600, "desired_system_current_a": 38,
            "limits": {"max_input_voltage_v": 20, "max_input_current_a": 50},
        })
        assert resp.status_code == 422


class TestWireSizingEndpoint:
    def test_reference(self):
        resp = client.post("/api/v1/wire-sizing", json={
            "current_a": 25, "voltage_v": 600, "distance_m": 30, "max_voltage_drop_percent": 2,
        })
        assert resp.status_code == 200
        assert resp.json()["recommended_wire_size_mm2"] == 2.5

    def test_size_unavailable(self):
        resp = client.post("/api/v1/wire-sizing", json={
            "current_a": 100, "voltage_v": 12, "distance_m": 100, "max_voltage_drop_percent": 1,
        })
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["error"] == "size_unavailable"
        assert detail["required_area_mm2"] > 120

    def test_conductors(self):
        resp = client.get("/api/v1/wire-sizing/conductors")
        assert resp.status_code == 200
        assert len(resp.json()["conductors"]) == 12

    def test_arabic_fallback(self):
        resp = client.post("/api/v1/wire-sizing?explain=true&locale=ar", json={
            "current_a": 25, "voltage_v": 600, "distance_m": 30,
        })
        assert resp.status_code == 200
        assert "مم²" in resp.json()["explanation"]["text"]


class TestSupplementedCalculators:
    def test_area(self):
        resp = client.post("/api/v1/area-production", json={"land_width_m": 20, "land_length_m": 10})
        assert resp.status_code == 200
        assert resp.json()["max_panels"] == 40

    def test_area_missing_dimensions(self):
        resp = client.post("/api/v1/area-production", json={"land_width_m": 20})
        assert resp.status_code == 422

    def test_inverter(self):
        resp = client.post("/api/v1/inverter-sizing", json={
            "total_dc_power_kw": 5, "max_voc_v": 500, "max_isc_a": 10,
        })
        assert resp.status_code == 200
        assert resp.json()["required_max_input_voltage_v"] == pytest.approx(575.0)

    def test_battery(self):
        resp = client.post("/api/v1/battery-bank", json={"daily_load_kwh": 10, "autonomy_days": 2,
                                                          "depth_of_discharge_percent": 50})
        assert resp.status_code == 200
        assert resp.json()["total_batteries"] == 20

    def test_optimizer(self):
        resp = client.post("/api/v1/design-optimizer?explain=true", json={
            "monthly_consumption_kwh": 600, "surface_area_m2": 100,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["limiting_factor"] == "consumption"
        assert data["panel_config"]["panel_count"] == 7
        assert "consumption" in data["explanation"]["text"]

    def test_optimizer_area_too_small(self):
        resp = client.post("/api/v1/design-optimizer", json={
            "monthly_consumption_kwh": 600, "surface_area_m2": 2,
        })
        assert resp.status_code == 422


class TestWeatherEndpoints:
    def test_conditions(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather()
        resp = client.get("/api/v1/weather/irbid")
        assert resp.status_code == 200
        assert resp.json()["location"] == "irbid"

    def test_conditions_failure(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather(
            error=ExternalServiceFailure("weather", "WEATHER_API_KEY is not configured"),
        )
        resp = client.get("/api/v1/weather/irbid")
        assert resp.status_code == 502
        assert "weather" in resp.json()["detail"]

    def test_historical(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather()
        resp = client.get("/api/v1/weather/amman/historical")
        assert resp.status_code == 200
        assert resp.json()["monthly_irradiance_wh"] == [5000.0] * 12

    def test_live_simulation(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather()
        resp = client.post("/api/v1/live-simulation", json={"system_size_kw": 5, "location": Location.AMMAN.value})
        assert resp.status_code == 200
        assert resp.json()["current"]["output_power_w"] == pytest.approx(3060.0)

    def test_live_simulation_weather_down(self):
        app.dependency_overrides[get_weather_client] = lambda: FakeWeather(
            error=ExternalServiceFailure("weather", "request timed out after 10s"),
        )
        resp = client.post("/api/v1/live-simulation", json={"system_size_kw": 5})
        assert resp.status_code == 502


class TestProjectEndpoints:

    def setup_method(self):
        self.store = InMemoryProjectStore()
        app.dependency_overrides[get_project_store] = lambda: self.store

    def test_save_list_delete(self):
        resp = client.post("/api/v1/projects", json={
            "name": "Villa roof", "owner_id": "u1", "design": {"size_kw": 5},
        })
        assert resp.status_code == 201
        project_id = resp.json()["id"]

        listed = client.get("/api/v1/projects", params={"owner_id": "u1"}).json()
        assert [p["id"] for p in listed] == [project_id]

        resp = client.delete(f"/api/v1/projects/{project_id}", params={"owner_id": "u1"})
        assert resp.status_code == 204
        assert client.get("/api/v1/projects", params={"owner_id": "u1"}).json() == []

    def test_delete_missing(self):
        resp = client.delete("/api/v1/projects/nope", params={"owner_id": "u1"})
        assert resp.status_code == 404

    def test_empty_name(self):
        resp = client.post("/api/v1/projects", json={"name": "", "owner_id": "u1"})
        assert resp.status_code == 422

    def test_store_unavailable(self):
        app.dependency_overrides[get_project_store] = lambda: BrokenStore()
        resp = client.get("/api/v1/projects", params={"owner_id": "u1"})
        assert resp.status_code == 503


class TestNonFiniteBodies:
    """Bodies carrying JSON Infinity/NaN literals, which the json= helper refuses to send."""

    def _post(self, url, body):
        return client.post(url, content=body, headers={"content-type": "application/json"})

    def test_panels_infinite_bill(self):
        resp = self._post("/api/v1/panels/from-consumption", '{"monthly_bill": Infinity, "kwh_price": 0.12}')
        assert resp.status_code == 422
        assert "finite" in resp.json()["detail"]

    def test_string_config_nan_voltage(self):
        resp = self._post(
            "/api/v1/string-configuration",
            '{"panel_voltage_v": NaN, "panel_current_a": 9.5, '
            '"desired_system_voltage_v": 600, "desired_system_current_a": 38}',
        )
        assert resp.status_code == 422
        assert "finite" in resp.json()["detail"]

    def test_wire_sizing_nan_current_is_not_size_unavailable(self):
        resp = self._post(
            "/api/v1/wire-sizing",
            '{"current_a": NaN, "voltage_v": 600, "distance_m": 30, "max_voltage_drop_percent": 2}',
        )
        assert resp.status_code == 422
        assert resp.json()["detail"] == "current_a must be a finite number, got nan"
