"""
4-band resistor colour code.

Converts resistor values to and from two significant digits plus a decade
multiplier, and names the bands by colour. Only multipliers x1 through x1M
(exponent 0-6) are supported; anything else is reported as an
UnsupportedRange result rather than raised.

Values should be snapped with snap_to_e24() before encoding so the two
digits land on a real E24 part.
"""

import math
from dataclasses import dataclass
from typing import List, Union

from engine.errors import ValidationError

DIGIT_COLOURS = (
    'Black', 'Brown', 'Red', 'Orange', 'Yellow',
    'Green', 'Blue', 'Violet', 'Grey', 'White',
)

# index == decade exponent (x1 … x1M)
MULTIPLIER_COLOURS = (
    'Black', 'Brown', 'Red', 'Orange', 'Yellow', 'Green', 'Blue',
)

TOLERANCE_COLOURS = {
    'Gold': 5.0,
    'Silver': 10.0,
}

MIN_EXPONENT = 0
MAX_EXPONENT = len(MULTIPLIER_COLOURS) - 1


@dataclass(frozen=True)
class BandCode:
    """Two significant digits, a decade exponent and a tolerance band."""
    d1: int
    d2: int
    exponent: int
    tolerance: str = 'Gold'

    def __post_init__(self):
        for name, digit in (('d1', self.d1), ('d2', self.d2)):
            if not 0 <= digit <= 9:
                raise ValidationError(f"Band digit {name} must be 0-9, got {digit}")
        if not MIN_EXPONENT <= self.exponent <= MAX_EXPONENT:
            raise ValidationError(
                f"Multiplier exponent must be {MIN_EXPONENT}-{MAX_EXPONENT}, got {self.exponent}"
            )
        if self.tolerance not in TOLERANCE_COLOURS:
            raise ValidationError(f"Unknown tolerance band {self.tolerance!r}")

    @property
    def significant(self) -> int:
        return 10 * self.d1 + self.d2

    @property
    def tolerance_pct(self) -> float:
        return TOLERANCE_COLOURS[self.tolerance]


@dataclass(frozen=True)
class UnsupportedRange:
    """A value whose multiplier falls outside the 4-band table."""
    value: float
    exponent: int

    def __bool__(self):
        return False

    @property
    def message(self) -> str:
        return (
            f"{self.value:.3g} Ohms needs multiplier 10^{self.exponent}, outside the "
            f"supported 4-band range (x1 to x1M)"
        )


def decode(code: BandCode) -> float:
    """Resistance in Ohms for a band code: (10*d1 + d2) * 10^exponent."""
    return float(code.significant * 10 ** code.exponent)


def encode(value: float) -> Union[BandCode, UnsupportedRange]:
    """
    Encode a resistance as a 4-band code.

    The value is normalized into [10, 100), rounded half up to two digits
    (a round up to 100 carries into the exponent), then split into digits.

    Returns:
        BandCode, or UnsupportedRange when the exponent is outside 0-6
        (roughly below 10 Ω or from 99.5 MΩ up) or the value is not positive.
    """
    if value <= 0:
        return UnsupportedRange(value=value, exponent=0)

    v = value
    exponent = 0
    while v >= 100.0:
        v /= 10.0
        exponent += 1
    while v < 10.0:
        v *= 10.0
        exponent -= 1

    two_digits = int(math.floor(v + 0.5))
    if two_digits >= 100:
        two_digits //= 10
        exponent += 1

    if not MIN_EXPONENT <= exponent <= MAX_EXPONENT:
        return UnsupportedRange(value=value, exponent=exponent)

    return BandCode(d1=two_digits // 10, d2=two_digits % 10, exponent=exponent)


def band_colours(code: BandCode) -> List[str]:
    """Colour names of the four bands, first digit to tolerance."""
    return [
        DIGIT_COLOURS[code.d1],
        DIGIT_COLOURS[code.d2],
        MULTIPLIER_COLOURS[code.exponent],
        code.tolerance,
    ]


def band_label(code: BandCode) -> str:
    """e.g. 'Yellow-Violet-Red-Gold' for 4.7kΩ."""
    return '-'.join(band_colours(code))
