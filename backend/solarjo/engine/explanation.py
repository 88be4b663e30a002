"""
Narrative explanations for calculator results.

The explanation service is an external text generator. It is only asked
after a numeric result exists, it receives the already-computed numbers, and
whatever it returns (or fails to return) never changes those numbers. When
it is unavailable a fixed template referencing the same values is used.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, TypeVar

import requests
from pydantic import BaseModel

from solarjo import config
from solarjo.config import Locale
from solarjo.errors import ExternalServiceFailure
from solarjo.models.explanation import Explanation

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)


class ExplanationProvider(ABC):
    """Base class for narrative generators."""

    @abstractmethod
    def explain(self, topic: str, facts: dict, locale: Locale) -> str:
        """Return free text for the given facts or raise ExternalServiceFailure."""
        ...


class HttpExplanationProvider(ExplanationProvider):
    """Posts the facts to a hosted prompt endpoint and reads back ``text``."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = config.EXPLANATION_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        # Shared across worker threads, so no Session unless one is injected
        self.session = session

    def explain(self, topic: str, facts: dict, locale: Locale) -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        payload = {"topic": topic, "facts": facts, "locale": Locale(locale).value}
        try:
            http = self.session if self.session is not None else requests
            response = http.post(
                self.url, json=payload, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            text = response.json().get("text")
        except requests.Timeout:
            raise ExternalServiceFailure("explanation", f"request timed out after {self.timeout}s")
        except requests.RequestException as exc:
            raise ExternalServiceFailure("explanation", f"request failed: {exc}")
        except (ValueError, AttributeError) as exc:
            raise ExternalServiceFailure("explanation", f"invalid response: {exc}")

        if not isinstance(text, str) or not text.strip():
            raise ExternalServiceFailure("explanation", "response contained no text")
        return text.strip()


def default_provider() -> Optional[ExplanationProvider]:
    """Provider built from the environment, or None when not configured."""
    if not config.EXPLANATION_API_URL:
        return None
    return HttpExplanationProvider(config.EXPLANATION_API_URL, config.EXPLANATION_API_KEY)


# Fixed-template narratives, keyed by topic then locale
_TEMPLATES = {
    "wire_sizing": {
        Locale.EN: (
            "A {recommended_wire_size_mm2:g} mm² conductor is the smallest standard size that keeps "
            "the voltage drop at {actual_voltage_drop_v:.2f} V ({actual_voltage_drop_percent:.2f}%), "
            "within the allowed {max_allowed_voltage_drop_v:.2f} V. Expected cable loss is "
            "{power_loss_w:.1f} W. A thinner cable would waste more energy and run hotter."
        ),
        Locale.AR: (
            "مقطع السلك {recommended_wire_size_mm2:g} مم² هو أصغر مقطع قياسي يحافظ على هبوط الجهد عند "
            "{actual_voltage_drop_v:.2f} فولت ({actual_voltage_drop_percent:.2f}%) ضمن الحد المسموح "
            "{max_allowed_voltage_drop_v:.2f} فولت. الفقد المتوقع في السلك {power_loss_w:.1f} واط. "
            "استخدام سلك أرفع يزيد الفقد وارتفاع الحرارة."
        ),
    },
    "string_configuration": {
        Locale.EN: (
            "Connect {panels_per_string} panels in series per string ({string_voltage_v:g} V) and "
            "{parallel_strings} strings in parallel ({array_current_a:g} A), {total_panels} panels in "
            "total. Check polarity on every string and never mix strings of different lengths on one input."
        ),
        Locale.AR: (
            "وصّل {panels_per_string} ألواح على التوالي في كل سلسلة ({string_voltage_v:g} فولت) و"
            "{parallel_strings} سلاسل على التوازي ({array_current_a:g} أمبير)، بإجمالي {total_panels} لوحاً. "
            "تحقق من القطبية في كل سلسلة ولا تخلط سلاسل مختلفة الطول على نفس المدخل."
        ),
    },
    "panel_count": {
        Locale.EN: (
            "A monthly consumption of {total_kwh:.0f} kWh ({daily_kwh:.2f} kWh per day) needs "
            "{required_panels} panels, about {system_size_kw:.2f} kWp, with each panel delivering "
            "{per_panel_daily_kwh:.2f} kWh per day after losses."
        ),
        Locale.AR: (
            "استهلاك شهري قدره {total_kwh:.0f} كيلوواط ساعة ({daily_kwh:.2f} يومياً) يحتاج إلى "
            "{required_panels} لوحاً، أي حوالي {system_size_kw:.2f} كيلوواط ذروة، حيث ينتج كل لوح "
            "{per_panel_daily_kwh:.2f} كيلوواط ساعة يومياً بعد الفقد."
        ),
    },
    "financial_viability": {
        Locale.EN: (
            "An investment of {total_investment:.0f} JOD produces about {total_annual_production:.0f} kWh "
            "and {annual_revenue:.0f} JOD in the first year. Payback: {payback}. Estimated net profit over "
            "25 years: {net_profit_25_years:.0f} JOD."
        ),
        Locale.AR: (
            "استثمار بقيمة {total_investment:.0f} دينار ينتج حوالي {total_annual_production:.0f} كيلوواط ساعة "
            "و{annual_revenue:.0f} دينار في السنة الأولى. فترة الاسترداد: {payback}. صافي الربح المقدر خلال "
            "25 سنة: {net_profit_25_years:.0f} دينار."
        ),
    },
    "design_optimizer": {
        Locale.EN: (
            "The design is limited by {limiting_factor}: {panel_count} panels ({total_dc_power:.2f} kWp) "
            "on {required_area:.1f} m², for a monthly consumption of {monthly_consumption:.0f} kWh and "
            "{surface_area:.0f} m² of available area."
        ),
        Locale.AR: (
            "التصميم محدود بعامل {limiting_factor}: {panel_count} لوحاً ({total_dc_power:.2f} كيلوواط ذروة) "
            "على مساحة {required_area:.1f} م²، لاستهلاك شهري {monthly_consumption:.0f} كيلوواط ساعة "
            "ومساحة متاحة {surface_area:.0f} م²."
        ),
    },
}

_GENERIC = {
    Locale.EN: "Calculation complete. No further explanation is available right now.",
    Locale.AR: "تم الحساب. لا يتوفر شرح إضافي حالياً.",
}


def fallback_text(topic: str, facts: dict, locale: Locale) -> str:
    """Deterministic narrative built from the same numeric facts."""
    loc = Locale(locale)
    template = _TEMPLATES.get(topic, {}).get(loc)
    if template is None:
        return _GENERIC[loc]
    try:
        return template.format(**facts)
    except (KeyError, ValueError, TypeError) as exc:
        logger.warning("Fallback template for %s could not be filled: %s", topic, exc)
        return _GENERIC[loc]


def narrate(
    provider: Optional[ExplanationProvider],
    topic: str,
    facts: dict,
    locale: Locale = Locale.EN,
) -> Explanation:
    """Best-effort narrative; never raises for service problems."""
    if provider is None:
        return Explanation(text=fallback_text(topic, facts, locale), source="fallback")
    try:
        return Explanation(text=provider.explain(topic, facts, locale), source="service")
    except Exception as exc:
        logger.warning("Explanation service failed for %s, using fallback text: %s", topic, exc)
        return Explanation(text=fallback_text(topic, facts, locale), source="fallback")


def with_explanation(
    result: ResultT,
    provider: Optional[ExplanationProvider],
    topic: str,
    facts: dict,
    locale: Locale = Locale.EN,
) -> ResultT:
    """Copy of ``result`` with a narrative attached; numeric fields untouched."""
    return result.model_copy(update={"explanation": narrate(provider, topic, facts, locale)})
