"""
SolarJo configuration and constants.
"""

import os
from enum import Enum


class Location(str, Enum):
    AMMAN = "amman"
    ZARQA = "zarqa"
    IRBID = "irbid"
    AQABA = "aqaba"


class Locale(str, Enum):
    EN = "en"
    AR = "ar"


MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Fixed calendar, no leap years
DAYS_IN_MONTH: tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Panel calculator uses a flat month
DAYS_PER_BILLING_MONTH = 30

# Financial horizon
PROJECT_LIFETIME_YEARS = 25
DEFAULT_DEGRADATION_RATE_PERCENT = 0.5
MAX_DEGRADATION_RATE_PERCENT = 5.0
SENSITIVITY_DELTA = 0.10  # ±10% on cost and price

# System loss bounds (%)
MIN_SYSTEM_LOSS_PERCENT = 0.0
MAX_SYSTEM_LOSS_PERCENT = 99.0

# Conductors
COPPER_RESISTIVITY = 0.0172  # Ω·mm²/m at 20 °C
STANDARD_WIRE_SIZES_MM2: tuple[float, ...] = (
    1.5, 2.5, 4.0, 6.0, 10.0, 16.0, 25.0, 35.0, 50.0, 70.0, 95.0, 120.0,
)
MAX_VOLTAGE_DROP_PERCENT = 10.0

# Equipment ceilings for the string solver (typical residential string inverter)
DEFAULT_MAX_INPUT_VOLTAGE_V = 1000.0
DEFAULT_MAX_INPUT_CURRENT_A = 50.0

# Inverter sizing margins
INVERTER_DC_AC_MIN_RATIO = 0.9
INVERTER_DC_AC_MAX_RATIO = 1.1
INVERTER_VOC_MARGIN = 1.15
INVERTER_ISC_MARGIN = 1.25

# Area layout
ROW_SPACING_FACTOR = 1.5

# Design optimizer assumptions
OPTIMIZER_PANEL_WIDTH_M = 1.13
OPTIMIZER_PANEL_LENGTH_M = 2.28
OPTIMIZER_INVERTER_RATIO = 0.95
OPTIMIZER_THREE_PHASE_ABOVE_KW = 6.0
OPTIMIZER_TILT_DEG = 30.0     # near-optimal fixed tilt for Jordan
OPTIMIZER_AZIMUTH_DEG = 180.0  # south-facing

# Live simulation (PV cell temperature model)
NOCT_C = 45.0
STC_CELL_TEMP_C = 25.0
POWER_TEMP_COEFFICIENT = -0.004  # per °C
MAX_CLEAR_SKY_IRRADIANCE = 1000.0  # W/m²
UV_INDEX_TO_IRRADIANCE = 100.0     # W/m² per UV index unit

# External services
WEATHER_API_KEY = os.environ.get("WEATHER_API_KEY", "")
WEATHER_API_URL = os.environ.get(
    "WEATHER_API_URL", "https://api.weatherapi.com/v1/forecast.json"
)
NASA_POWER_URL = os.environ.get(
    "NASA_POWER_URL", "https://power.larc.nasa.gov/api/temporal/climatology/point"
)
WEATHER_TIMEOUT_S = float(os.environ.get("SOLARJO_WEATHER_TIMEOUT", "10"))

EXPLANATION_API_URL = os.environ.get("SOLARJO_EXPLANATION_URL", "")
EXPLANATION_API_KEY = os.environ.get("SOLARJO_EXPLANATION_API_KEY", "")
EXPLANATION_TIMEOUT_S = float(os.environ.get("SOLARJO_EXPLANATION_TIMEOUT", "15"))

# Allowed frontend origins
CORS_ORIGINS = [
    "http://localhost:9002",  # Next.js dashboard
    "http://localhost:3000",
    "http://127.0.0.1:9002",
    "http://127.0.0.1:3000",
]
