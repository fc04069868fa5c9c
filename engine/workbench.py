"""
Workbench: the last-used values carried between calculations.

A Workbench is owned by the caller. Tools read their defaults from it and
the caller swaps in the updated copy they hand back.
"""

from dataclasses import asdict, dataclass, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class Workbench:
    voltage: float = 10.0      # V
    resistor: float = 4700.0   # Ω
    capacitor: float = 1e-6    # F
    current: float = 0.001     # A
    vf: float = 0.7            # V, LED forward drop
    inductor: float = 10e-3    # H

    def updated(self, **changes: Optional[float]) -> 'Workbench':
        """
        Copy with the given fields replaced.

        None and non-positive values are ignored so a failed or
        degenerate result never becomes the next default.
        """
        kept = {k: v for k, v in changes.items() if v is not None and v > 0}
        return replace(self, **kept)

    def pick(self, field: str, value: Optional[float]) -> float:
        """value if given, otherwise this workbench's default for field."""
        return getattr(self, field) if value is None else value

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)
