"""
Bench calculators: Ohm's law and power, voltage divider, LED series resistor.

All inputs are in base SI units. Resistances are used as given; callers
that want standard parts snap them first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from engine.components import snap_to_e24
from engine.errors import ValidationError


class OhmsLawMode(str, Enum):
    VOLTAGE = "V"      # V = I·R
    CURRENT = "I"      # I = V/R
    RESISTANCE = "R"   # R = V/I
    POWER = "P"        # P = V·I


OHMS_LAW_UNITS = {
    OhmsLawMode.VOLTAGE: 'V',
    OhmsLawMode.CURRENT: 'A',
    OhmsLawMode.RESISTANCE: 'Ohms',
    OhmsLawMode.POWER: 'W',
}


@dataclass(frozen=True)
class LedResistor:
    r_ideal: float
    r_standard: float
    i_actual: float


def _require(name: str, value: Optional[float]) -> float:
    if value is None:
        raise ValidationError(f"{name} is required")
    return value


def ohms_law(
    mode: OhmsLawMode,
    voltage: Optional[float] = None,
    current: Optional[float] = None,
    resistance: Optional[float] = None,
) -> float:
    """
    Solve one Ohm's-law or power relation.

    Only the operands the mode needs are read.

    Raises:
        ValidationError: a needed operand is missing, R is zero for I = V/R,
        or I is zero for R = V/I.
    """
    mode = OhmsLawMode(mode)

    if mode is OhmsLawMode.VOLTAGE:
        return _require('Current', current) * _require('Resistance', resistance)

    if mode is OhmsLawMode.CURRENT:
        r = _require('Resistance', resistance)
        if r == 0:
            raise ValidationError("Resistance cannot be zero")
        return _require('Voltage', voltage) / r

    if mode is OhmsLawMode.RESISTANCE:
        i = _require('Current', current)
        if i == 0:
            raise ValidationError("Current cannot be zero")
        return _require('Voltage', voltage) / i

    return _require('Voltage', voltage) * _require('Current', current)


def voltage_divider(vin: float, r1: float, r2: float) -> float:
    """Vout = Vin · R2 / (R1 + R2), R1 on top."""
    if r1 + r2 == 0:
        raise ValidationError("R1 + R2 cannot be zero")
    return vin * (r2 / (r1 + r2))


def led_resistor(vs: float, vf: float, current: float) -> LedResistor:
    """
    Series resistor for an LED, snapped to the nearest E24 value.

    Returns the ideal resistance, the standard part, and the current that
    actually flows with the standard part.

    Raises:
        ValidationError: vf >= vs, or current <= 0.
    """
    if vf >= vs:
        raise ValidationError("Supply voltage must be greater than LED forward voltage")
    if current <= 0:
        raise ValidationError("Target current must be positive")

    r_ideal = (vs - vf) / current
    r_standard = snap_to_e24(r_ideal)
    return LedResistor(
        r_ideal=r_ideal,
        r_standard=r_standard,
        i_actual=(vs - vf) / r_standard,
    )
