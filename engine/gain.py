"""
Op-amp gain designer.

Finds the pair of E24 resistors (R1 from the 1k/10k/100k decades, R2
snapped to E24) that best hits a target closed-loop gain:

    Non-inverting:  G = 1 + R2/R1
    Inverting:      G = -R2/R1   (magnitude used)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from engine.components import E24_BASE, snap_to_e24
from engine.errors import ValidationError

R1_DECADES = (1e3, 1e4, 1e5)


class AmplifierMode(str, Enum):
    NON_INVERTING = "non_inverting"
    INVERTING = "inverting"


@dataclass(frozen=True)
class GainDesign:
    r1: float
    r2_ideal: float
    r2: float
    actual_gain: float
    error_pct: float


def _validate(mode: AmplifierMode, target_gain: float) -> None:
    if target_gain <= 0:
        raise ValidationError(f"Target gain magnitude must be positive, got {target_gain}")
    if mode is AmplifierMode.NON_INVERTING and target_gain < 1.0:
        raise ValidationError("Non-inverting gain must be >= 1")


def _candidates(mode: AmplifierMode, target_gain: float) -> Iterator[GainDesign]:
    for decade in R1_DECADES:
        for base in E24_BASE:
            r1 = base * decade
            if mode is AmplifierMode.NON_INVERTING:
                r2_ideal = r1 * (target_gain - 1.0)
            else:
                r2_ideal = r1 * target_gain

            # unity non-inverting gain means R2 is a wire
            if r2_ideal <= 0:
                continue

            r2 = snap_to_e24(r2_ideal)
            if mode is AmplifierMode.NON_INVERTING:
                actual = 1.0 + r2 / r1
            else:
                actual = r2 / r1
            error = abs(actual - target_gain) / target_gain * 100.0
            yield GainDesign(r1=r1, r2_ideal=r2_ideal, r2=r2, actual_gain=actual, error_pct=error)


def design_gain(mode: AmplifierMode, target_gain: float) -> Optional[GainDesign]:
    """
    Best standard resistor pair for a target gain.

    The 72 R1 candidates are scanned decade by decade in ascending order;
    the first pair with the lowest error wins.

    Returns:
        GainDesign, or None for a non-inverting target of exactly 1
        (a voltage follower has no resistor pair).

    Raises:
        ValidationError: target <= 0, or non-inverting target < 1.
    """
    mode = AmplifierMode(mode)
    _validate(mode, target_gain)

    best = None
    for candidate in _candidates(mode, target_gain):
        if best is None or candidate.error_pct < best.error_pct:
            best = candidate
    return best


def gain_candidates(
    mode: AmplifierMode,
    target_gain: float,
    max_error_pct: float = 2.0,
) -> List[GainDesign]:
    """All candidate pairs under max_error_pct, lowest error first."""
    mode = AmplifierMode(mode)
    _validate(mode, target_gain)
    matches = [c for c in _candidates(mode, target_gain) if c.error_pct < max_error_pct]
    return sorted(matches, key=lambda c: c.error_pct)
