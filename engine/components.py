"""
E24 standard resistor values and engineering notation.

Provides snapping of arbitrary values to the nearest E24 standard value,
plus formatting and parsing of SI-prefixed engineering notation.
"""

import math
from typing import Tuple

from engine.errors import ValidationError

# E24 base values (multiplied by decades to get full range)
# IEC 60063 values per decade (1.0 to <10.0)
E24_BASE = (
    1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1,
)

# SI prefix table
_SI_PREFIXES = [
    (1e-15, 'f'),
    (1e-12, 'p'),
    (1e-9,  'n'),
    (1e-6,  'µ'),
    (1e-3,  'm'),
    (1e0,   ''),
    (1e3,   'k'),
    (1e6,   'M'),
    (1e9,   'G'),
]

# Suffixes accepted on input
_INPUT_SUFFIXES = {
    'p': 1e-12,
    'n': 1e-9,
    'u': 1e-6,
    'm': 1e-3,
    'k': 1e3,
    'K': 1e3,
    'M': 1e6,
    'G': 1e9,
}


def snap_to_e24(target: float) -> float:
    """
    Snap a value to the nearest E24 standard value.

    The value is normalized into its decade (mantissa in [1, 10)) and the
    mantissa is matched against E24_BASE by absolute difference. The first
    minimal match in ascending order wins. If 10.0 (1.0 in the next decade)
    is strictly closer than every in-decade value, the result rolls over.

    Non-positive targets return 1.0; validate before calling if that
    fallback is not wanted.

    Examples:
        snap_to_e24(4835)  → 4700.0
        snap_to_e24(9700)  → 10000.0
    """
    if target <= 0:
        return E24_BASE[0]

    decade = math.floor(math.log10(target))
    magnitude = 10.0 ** decade
    mantissa = target / magnitude

    best_base = E24_BASE[0]
    best_diff = abs(mantissa - best_base)
    for base in E24_BASE[1:]:
        diff = abs(mantissa - base)
        if diff < best_diff:
            best_diff = diff
            best_base = base

    if abs(mantissa - 10.0) < best_diff:
        return E24_BASE[0] * magnitude * 10.0

    return best_base * magnitude


def snap_error_pct(target: float, snapped: float) -> float:
    """Signed error of a snapped value in percent (positive: snapped is higher)."""
    if target == 0:
        return 0.0
    return round((snapped - target) / target * 100, 4)


def snap_resistor(value_ohm: float) -> Tuple[float, float]:
    """Snap a resistor value (in Ohms) and report the error percentage."""
    if value_ohm <= 0:
        raise ValidationError(f"Resistance must be positive, got {value_ohm}")
    snapped = snap_to_e24(value_ohm)
    return snapped, snap_error_pct(value_ohm, snapped)


def engineering_notation(value: float, unit: str = '', precision: int = 3) -> str:
    """
    Format a value in engineering notation with SI prefix.

    Examples:
        engineering_notation(1000, 'Ω')     → '1kΩ'
        engineering_notation(0.0001, 'F')    → '100µF'
        engineering_notation(0.047, 'H')     → '47mH'
        engineering_notation(4700, 'Ω')      → '4.7kΩ'
    """
    if value == 0:
        return f"0{unit}"

    abs_value = abs(value)
    sign = '-' if value < 0 else ''

    for scale, prefix in reversed(_SI_PREFIXES):
        if abs_value >= scale:
            scaled = round(abs_value / scale, 9)
            if scaled == int(scaled):
                return f"{sign}{int(scaled)}{prefix}{unit}"
            return f"{sign}{scaled:.{precision}g}{prefix}{unit}"

    # Fallback for extremely small values
    return f"{value:.{precision}g}{unit}"


def parse_engineering(text: str) -> float:
    """
    Parse a number with an optional single SI suffix.

    Accepted suffixes: p n u m k K M G. Whitespace is allowed between
    the number and the suffix; nothing may follow the suffix.

    Examples:
        parse_engineering('4.7k')  → 4700.0
        parse_engineering('100 n') → 1e-7
    """
    stripped = text.strip()
    if not stripped:
        raise ValidationError("Empty input")

    # Longest leading prefix that parses as a float
    number = None
    end = 0
    for i in range(len(stripped), 0, -1):
        try:
            number = float(stripped[:i])
        except ValueError:
            continue
        end = i
        break

    if number is None:
        raise ValidationError(f"Invalid input: {text!r}")

    suffix = stripped[end:].strip()
    if not suffix:
        return number

    multiplier = _INPUT_SUFFIXES.get(suffix[0])
    if multiplier is None:
        raise ValidationError(f"Unknown suffix {suffix[0]!r} in {text!r}")
    if len(suffix) > 1:
        raise ValidationError(f"Trailing characters after suffix in {text!r}")

    return number * multiplier
