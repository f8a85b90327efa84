"""Unit conversions and derived weather quantities.

All helpers are pure. Functions returning a displayed quantity round exactly
once, to one decimal place, half away from zero; callers must not re-round.
"""

from __future__ import annotations

import math

from .models import Units

MAGNUS_B = 17.625
MAGNUS_C = 243.04

WIND_SYMBOLS = ("↑", "↗", "→", "↘", "↓", "↙", "←", "↖")

_MPH_PER_MS = 2.2369362920544


def round_places(value: float, places: int) -> float:
    """Round to ``places`` decimals, half away from zero."""
    scale = 10.0**places
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale


def round_one(value: float) -> float:
    """Round to one decimal place, half away from zero."""
    return round_places(value, 1)


def round_int(value: float) -> int:
    """Round to the nearest integer, half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def c_to_f(c: float) -> float:
    return c * 9.0 / 5.0 + 32.0


def f_to_c(f: float) -> float:
    return (f - 32.0) * 5.0 / 9.0


def kmh_to_ms(kmh: float) -> float:
    return kmh / 3.6


def ms_to_mph(ms: float) -> float:
    return ms * _MPH_PER_MS


def mph_to_ms(mph: float) -> float:
    return mph / _MPH_PER_MS


def mm_to_inch(mm: float) -> float:
    return mm / 25.4


def dew_point(t: float, h: float, units: Units) -> float:
    """Dew point via the Magnus formula.

    ``t`` is in the configured unit system and ``h`` is relative humidity in
    percent. Imperial input is converted to Celsius before the formula and the
    result back to Fahrenheit afterwards.
    """
    if units == Units.IMPERIAL:
        t = f_to_c(t)
    # ln(0) is undefined; treat bone-dry air as 0.1 %.
    h = max(h, 0.1)
    gamma = (MAGNUS_B * t) / (MAGNUS_C + t) + math.log(h / 100.0)
    result = (MAGNUS_C * gamma) / (MAGNUS_B - gamma)
    if units == Units.IMPERIAL:
        result = c_to_f(result)
    return round_one(result)


def apparent_temperature(t: float, wind: float, h: float, units: Units) -> float:
    """Apparent ("feels like") temperature, AT = T + 0.33e - 0.70v - 4.00.

    ``e`` is the water vapour pressure in hPa derived from ``h``. The formula
    is calibrated for 10-40 °C and wind up to 10 m/s; other inputs are still
    evaluated. Imperial input (°F, mph) is converted first and the result is
    returned in °F.
    """
    if units == Units.IMPERIAL:
        t = f_to_c(t)
        wind = mph_to_ms(wind)
    e = (h / 100.0) * 6.105 * math.exp(17.27 * t / (237.7 + t))
    result = t + 0.33 * e - 0.70 * wind - 4.00
    if units == Units.IMPERIAL:
        result = c_to_f(result)
    return round_one(result)


def wind_direction_symbol(deg: float) -> str:
    """Arrow for the compass sector containing ``deg`` (0 = north)."""
    index = math.floor((deg % 360 + 22.5) / 45.0) % 8
    return WIND_SYMBOLS[index]


def normalize_degrees(deg: float) -> int:
    """Round a bearing to whole degrees in [0, 360)."""
    return round_int(deg) % 360
