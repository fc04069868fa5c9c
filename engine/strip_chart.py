"""
Text strip chart for simulation traces.

One row per downsampled sample: time in ms, a bar scaled between the
trace minimum and maximum, and the exact value.
"""

from typing import List, Sequence

import numpy as np

DISPLAY_ROWS = 25
GRAPH_WIDTH = 40


def _format_value(value: float, unit: str) -> str:
    if value != 0 and abs(value) < 0.001:
        return f"{value:.3e} {unit}"
    return f"{value:8.4f} {unit}"


def render_strip_chart(
    data: Sequence[float],
    t_total: float,
    title: str,
    unit: str,
    rows: int = DISPLAY_ROWS,
    width: int = GRAPH_WIDTH,
) -> str:
    """
    Render a trace as a vertical strip chart.

    Args:
        data: Samples, evenly spaced over t_total.
        t_total: Duration covered by data (seconds).
        title: Chart heading.
        unit: Unit label for values.
        rows: Approximate number of rows to show.
        width: Width of the bar area in characters.

    Returns:
        The chart as a multi-line string.
    """
    values = np.asarray(data, dtype=float)
    total = len(values)
    if total == 0:
        return f"\n=== {title} ===\n(no data)\n"

    stride = max(total // rows, 1)
    lo = float(values.min())
    hi = float(values.max())
    span = hi - lo
    if abs(span) < 1e-9:
        span = 1.0

    rule = "-----------|" + "-" * (width + 2) + "|-----------------"
    lines: List[str] = [
        "",
        f"=== {title} ===",
        f" {'Time':<9} | {'Waveform (Min->Max)':<{width}} | {'Exact Value':<15}",
        rule,
    ]
    for i in range(0, total, stride):
        value = float(values[i])
        t_ms = i / total * t_total * 1000.0
        pos = int((value - lo) / span * width)
        pos = min(max(pos, 0), width - 1)
        bar = "-" * pos + "O" + " " * (width - pos - 1)
        lines.append(f" {t_ms:6.2f} ms | {bar} | {_format_value(value, unit)}")
    lines.append(rule)
    lines.append(f" Range: [{lo:.4e}] to [{hi:.4e}] {unit}")
    return "\n".join(lines) + "\n"
