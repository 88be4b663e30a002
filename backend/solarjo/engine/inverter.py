"""
Grid-tied inverter sizing.

AC rating inside a 0.9–1.1 DC/AC window around the array kWp; input
ratings with 15% voltage and 25% current margin over the array Voc/Isc.
"""

from solarjo.config import (
    INVERTER_DC_AC_MAX_RATIO,
    INVERTER_DC_AC_MIN_RATIO,
    INVERTER_ISC_MARGIN,
    INVERTER_VOC_MARGIN,
)
from solarjo.errors import InvalidInput
from solarjo.engine.validation import require_finite
from solarjo.models.inverter import InverterSizingInput, InverterSizingResult


def size_inverter(ci: InverterSizingInput) -> InverterSizingResult:
    require_finite(
        total_dc_power_kw=ci.total_dc_power_kw,
        max_voc_v=ci.max_voc_v,
        max_isc_a=ci.max_isc_a,
    )
    if ci.total_dc_power_kw <= 0:
        raise InvalidInput("total_dc_power_kw must be positive")
    if ci.max_voc_v <= 0:
        raise InvalidInput("max_voc_v must be positive")
    if ci.max_isc_a <= 0:
        raise InvalidInput("max_isc_a must be positive")

    return InverterSizingResult(
        min_inverter_size_kw=ci.total_dc_power_kw * INVERTER_DC_AC_MIN_RATIO,
        max_inverter_size_kw=ci.total_dc_power_kw * INVERTER_DC_AC_MAX_RATIO,
        required_max_input_voltage_v=ci.max_voc_v * INVERTER_VOC_MARGIN,
        required_max_input_current_a=ci.max_isc_a * INVERTER_ISC_MARGIN,
        grid_phase=ci.grid_phase,
    )
