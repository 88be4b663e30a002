"""
Tests for the production & financial viability engine.

Reference case: 5 kWp in Amman, 15% loss, 700 JOD/kW, 0.12 JOD/kWh.
Σ sun_hours × days = 2086.3, so production = 2086.3 × 5 × 0.85 = 8866.775 kWh.
"""

import pytest

from solarjo.config import Location
from solarjo.engine.climate import load_climate_table
from solarjo.engine.financial import (
    cash_flow_projection,
    compute_financial_viability,
    evaluate_financial_viability,
    format_payback,
    payback_period,
)
from solarjo.errors import ExternalServiceFailure, InvalidInput
from solarjo.models.financial import (
    FinancialViabilityInput,
    FinitePayback,
    SystemSpec,
    UnreachablePayback,
)


def approx(value: float, rel_tol: float = 1e-9, abs_tol: float = 1e-6):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def _amman(**overrides):
    spec = SystemSpec(
        size_kw=overrides.pop("size_kw", 5.0),
        system_loss_percent=overrides.pop("system_loss_percent", 15.0),
    )
    return compute_financial_viability(
        spec,
        overrides.pop("location", Location.AMMAN),
        overrides.pop("cost_per_kw", 700.0),
        overrides.pop("kwh_price", 0.12),
        **overrides,
    )


class TestReferenceSystem:

    def setup_method(self):
        self.result = _amman()

    def test_total_investment(self):
        assert self.result.total_investment == approx(3500.0)

    def test_annual_production(self):
        assert self.result.total_annual_production == approx(8866.775)

    def test_production_is_sum_of_months(self):
        total = sum(m.production_kwh for m in self.result.monthly_breakdown)
        assert self.result.total_annual_production == approx(total)

    def test_revenue_is_production_times_price(self):
        assert self.result.annual_revenue == approx(self.result.total_annual_production * 0.12)

    def test_revenue_is_sum_of_months(self):
        total = sum(m.revenue for m in self.result.monthly_breakdown)
        assert self.result.annual_revenue == approx(total)

    def test_payback_months(self):
        assert self.result.payback_period == FinitePayback(months=40)

    def test_net_profit(self):
        assert self.result.net_profit_25_years == approx(23100.325)

    def test_twelve_months_in_calendar_order(self):
        months = [m.month for m in self.result.monthly_breakdown]
        assert len(months) == 12
        assert months[0] == "January"
        assert months[-1] == "December"

    def test_february_has_28_days(self):
        feb = self.result.monthly_breakdown[1]
        assert feb.production_kwh == approx(5.0 * 4.1 * 0.85 * 28)

    def test_location_and_source(self):
        assert self.result.location == "amman"
        assert self.result.sun_hours_source == "climate_table"
        assert self.result.warnings == []

    def test_format_payback(self):
        assert format_payback(self.result) == "3 years 4 months"


class TestIdempotence:
    def test_identical_inputs_identical_output(self):
        assert _amman() == _amman()

    def test_climate_table_unchanged(self):
        before = load_climate_table().get("amman").sun_hours
        _amman(sun_hours=[1.0] * 12)
        assert load_climate_table().get("amman").sun_hours == before


class TestLossBoundaries:
    def test_zero_loss_is_undiminished(self):
        result = _amman(system_loss_percent=0.0)
        assert result.total_annual_production == approx(2086.3 * 5.0)

    def test_99_percent_loss_is_small_and_positive(self):
        result = _amman(system_loss_percent=99.0)
        assert result.total_annual_production == approx(2086.3 * 5.0 * 0.01)
        assert all(m.production_kwh >= 0 for m in result.monthly_breakdown)

    def test_loss_above_99_rejected(self):
        with pytest.raises(InvalidInput):
            _amman(system_loss_percent=100.0)

    def test_negative_loss_rejected(self):
        with pytest.raises(InvalidInput):
            _amman(system_loss_percent=-1.0)


class TestInvalidInputs:
    @pytest.mark.parametrize("field,value", [
        ("size_kw", 0.0),
        ("size_kw", -2.0),
        ("cost_per_kw", 0.0),
        ("kwh_price", -0.1),
        ("degradation_rate_percent", 6.0),
    ])
    def test_rejected(self, field, value):
        with pytest.raises(InvalidInput):
            _amman(**{field: value})

    def test_unknown_location(self):
        with pytest.raises(InvalidInput, match="Unknown location"):
            _amman(location="madaba")

    def test_custom_sun_hours_wrong_length(self):
        with pytest.raises(InvalidInput):
            _amman(sun_hours=[5.0] * 11)

    def test_custom_sun_hours_negative(self):
        with pytest.raises(InvalidInput):
            _amman(sun_hours=[5.0] * 11 + [-1.0])


class TestPayback:
    def test_zero_irradiance_is_unreachable(self):
        result = _amman(sun_hours=[0.0] * 12)
        assert result.total_annual_production == 0.0
        assert isinstance(result.payback_period, UnreachablePayback)
        assert format_payback(result) == "More than 25 years"

    def test_rounds_up(self):
        assert payback_period(1000.0, 1000.0) == FinitePayback(months=12)
        assert payback_period(1001.0, 1000.0) == FinitePayback(months=13)

    def test_unreachable_serializes_with_kind(self):
        result = _amman(sun_hours=[0.0] * 12)
        assert result.model_dump(mode="json")["payback_period"] == {"kind": "unreachable"}

    def test_custom_source(self):
        assert _amman(sun_hours=[5.0] * 12).sun_hours_source == "custom"


class TestCashFlow:
    def test_length_and_start(self):
        points = _amman().cash_flow_analysis
        assert len(points) == 26
        assert points[0].year == 0
        assert points[0].cash_flow == approx(-3500.0)

    def test_first_year_has_no_degradation(self):
        points = _amman().cash_flow_analysis
        assert points[1].cash_flow == approx(-3500.0 + 1064.013)

    def test_without_degradation_matches_net_profit(self):
        result = _amman(degradation_rate_percent=0.0)
        assert result.cash_flow_analysis[-1].cash_flow == approx(result.net_profit_25_years)

    def test_degradation_reduces_final_cash_flow(self):
        points = cash_flow_projection(1000.0, 100.0, 1.0)
        assert points[-1].cash_flow < -1000.0 + 100.0 * 25


class TestSensitivity:

    def setup_method(self):
        self.sens = _amman().sensitivity_analysis

    def test_cost_lower_shortens_payback(self):
        assert self.sens.cost.lower.payback_period == FinitePayback(months=36)

    def test_cost_higher_lengthens_payback(self):
        assert self.sens.cost.higher.payback_period == FinitePayback(months=44)

    def test_price_cases(self):
        assert self.sens.price.lower.payback_period == FinitePayback(months=44)
        assert self.sens.price.higher.payback_period == FinitePayback(months=36)

    def test_profit_ordering(self):
        assert self.sens.cost.lower.net_profit_25_years > self.sens.cost.higher.net_profit_25_years
        assert self.sens.price.higher.net_profit_25_years > self.sens.price.lower.net_profit_25_years


class _FakeWeather:
    def __init__(self, irradiance=None, error=None):
        self.irradiance = irradiance
        self.error = error
        self.calls = []

    def fetch_historical_irradiance(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.irradiance


class TestHistoricalData:

    def _request(self, historical=True):
        return FinancialViabilityInput(
            system=SystemSpec(size_kw=5.0),
            location=Location.AMMAN,
            use_historical_data=historical,
        )

    def test_uses_historical_irradiance(self):
        weather = _FakeWeather(irradiance=[5000.0] * 12)
        result = evaluate_financial_viability(self._request(), weather)
        assert result.sun_hours_source == "historical"
        assert result.total_annual_production == approx(5.0 * 5.0 * 0.85 * 365)
        assert weather.calls == [(31.95, 35.91)]

    def test_falls_back_with_warning(self):
        weather = _FakeWeather(error=ExternalServiceFailure("nasa-power", "request timed out"))
        result = evaluate_financial_viability(self._request(), weather)
        assert result.sun_hours_source == "climate_table"
        assert result.total_annual_production == approx(8866.775)
        assert len(result.warnings) == 1
        assert "nasa-power" in result.warnings[0]

    def test_weather_not_called_without_flag(self):
        weather = _FakeWeather(irradiance=[5000.0] * 12)
        result = evaluate_financial_viability(self._request(historical=False), weather)
        assert weather.calls == []
        assert result.sun_hours_source == "climate_table"


class TestNonFiniteInputs:
    @pytest.mark.parametrize("field,value", [
        ("size_kw", float("nan")),
        ("system_loss_percent", float("nan")),
        ("cost_per_kw", float("inf")),
        ("kwh_price", float("inf")),
        ("kwh_price", float("nan")),
        ("degradation_rate_percent", float("-inf")),
    ])
    def test_rejected(self, field, value):
        with pytest.raises(InvalidInput, match="finite"):
            _amman(**{field: value})

    def test_nan_orientation_rejected(self):
        spec = SystemSpec(size_kw=5.0, tilt_deg=float("nan"))
        with pytest.raises(InvalidInput, match="finite"):
            compute_financial_viability(spec, Location.AMMAN, 700.0, 0.12)

    def test_custom_sun_hours_nan(self):
        with pytest.raises(InvalidInput, match="finite"):
            _amman(sun_hours=[5.0] * 11 + [float("nan")])
