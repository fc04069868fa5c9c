"""
Time-domain transient simulation for first- and second-order circuits.

Series RC, RL, LC and RLC circuits driven by a step input Vs at t = 0+.
State equations (i is the loop current, which is the inductor current
wherever an inductor exists):

    RC:   i = (Vs - v_C) / R,             dv_C/dt = i / C
    RL:   di/dt = (Vs - i·R) / L
    LC:   di/dt = (Vs - i·R - v_C) / L,   dv_C/dt = i / C   (R = 0.1 Ω internal)
    RLC:  same as LC with the supplied R

The integrator is fixed-step forward Euler: STEPS recorded samples, each
followed by SUBSTEPS Euler updates, so the true step is t_total / 10000.
This is a teaching-grade simulator: the transient shape is right, the
last digits are not.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

import numpy as np

from engine.errors import ValidationError

logger = logging.getLogger(__name__)

STEPS = 1000
SUBSTEPS = 10

# Internal resistance used for LC so the model is not lossless
LC_INTERNAL_RESISTANCE = 0.1

# Substituted for non-positive reactive components
DEFAULT_CAPACITANCE = 1e-6
DEFAULT_INDUCTANCE = 1e-3


class CircuitTopology(str, Enum):
    RC = "rc"
    RL = "rl"
    LC = "lc"
    RLC = "rlc"

    @property
    def has_capacitor(self) -> bool:
        return self is not CircuitTopology.RL

    @property
    def has_inductor(self) -> bool:
        return self is not CircuitTopology.RC

    @property
    def uses_resistor(self) -> bool:
        return self is not CircuitTopology.LC


@dataclass(frozen=True)
class SimulationConfig:
    """
    Inputs for one simulation run, in base SI units.

    Components the topology does not use are ignored. t_total of None
    selects the automatic time window.
    """
    vs: float
    r: float = 0.0
    l: float = 0.0
    c: float = 0.0
    t_total: Optional[float] = None


@dataclass
class SimulationTrace:
    """Per-step samples of one run. Sample i is at time i * t_total / STEPS."""
    topology: CircuitTopology
    config: SimulationConfig
    t_total: float
    v_c: np.ndarray
    current: np.ndarray
    e_c: np.ndarray
    e_l: np.ndarray

    @property
    def time(self) -> np.ndarray:
        return np.arange(len(self.v_c)) * (self.t_total / len(self.v_c))


@dataclass(frozen=True)
class TraceSummary:
    peak_v_c: float
    peak_current: float
    peak_e_c: float
    peak_e_l: float
    final_energy: float


def effective_config(topology: CircuitTopology, config: SimulationConfig) -> SimulationConfig:
    """
    Apply the model's fixed substitutions and reject unusable inputs.

    LC always uses the internal resistance; non-positive L or C where the
    topology needs one is replaced by a default.
    """
    r, l, c = config.r, config.l, config.c

    if topology is CircuitTopology.LC:
        r = LC_INTERNAL_RESISTANCE
    elif r < 0:
        raise ValidationError(f"Resistance must not be negative, got {r}")
    elif r == 0 and topology in (CircuitTopology.RC, CircuitTopology.RL):
        raise ValidationError(f"{topology.name} circuit needs a non-zero series resistance")

    if topology.has_capacitor and c <= 0:
        logger.debug("Capacitance %s not usable, substituting %s F", c, DEFAULT_CAPACITANCE)
        c = DEFAULT_CAPACITANCE
    if topology.has_inductor and l <= 0:
        logger.debug("Inductance %s not usable, substituting %s H", l, DEFAULT_INDUCTANCE)
        l = DEFAULT_INDUCTANCE

    if config.t_total is not None and config.t_total <= 0:
        raise ValidationError(f"Simulation time must be positive, got {config.t_total}")

    return replace(config, r=r, l=l, c=c)


def auto_time_window(topology: CircuitTopology, r: float, l: float, c: float) -> float:
    """
    Pick a simulation window that shows the interesting part of the response.

    RC: 5·RC.  RL: 5·L/R.  LC: 3 periods at ω0 = 1/√(LC).
    RLC: α = R/2L. Underdamped (α < ω0) shows 10 periods, capped at the
    5/α decay envelope; critically or overdamped uses 10/α.
    """
    if topology is CircuitTopology.RC:
        return 5.0 * r * c
    if topology is CircuitTopology.RL:
        return 5.0 * l / r

    omega0 = 1.0 / math.sqrt(l * c)
    period = 2 * math.pi / omega0
    if topology is CircuitTopology.LC:
        return 3.0 * period

    alpha = r / (2.0 * l)
    if alpha < omega0:
        t_total = 10.0 * period
        if alpha > 0:
            t_total = min(t_total, 5.0 / alpha)
        return t_total
    return 10.0 / alpha


def simulate(topology: CircuitTopology, config: SimulationConfig) -> SimulationTrace:
    """
    Integrate the circuit from rest and record STEPS samples.

    Each sample is taken before that step's sub-steps run, so sample 0 is
    the initial condition v_C = 0, i = 0.

    Raises:
        ValidationError: negative R, zero R in RC/RL, or non-positive t_total.
    """
    topology = CircuitTopology(topology)
    cfg = effective_config(topology, config)
    vs, r, l, c = cfg.vs, cfg.r, cfg.l, cfg.c

    t_total = cfg.t_total
    if t_total is None:
        t_total = auto_time_window(topology, r, l, c)

    dt = t_total / STEPS / SUBSTEPS
    logger.debug("Simulating %s over %.4g s (dt=%.3g s)", topology.name, t_total, dt)

    v_c_trace = np.zeros(STEPS)
    i_trace = np.zeros(STEPS)
    e_c_trace = np.zeros(STEPS)
    e_l_trace = np.zeros(STEPS)

    vc = 0.0
    il = 0.0
    for step in range(STEPS):
        v_c_trace[step] = vc
        i_trace[step] = il
        if topology.has_capacitor:
            e_c_trace[step] = 0.5 * c * vc * vc
        if topology.has_inductor:
            e_l_trace[step] = 0.5 * l * il * il

        for _ in range(SUBSTEPS):
            if topology is CircuitTopology.RC:
                il = (vs - vc) / r
                vc += il / c * dt
            else:
                il += (vs - il * r - vc) / l * dt
                if topology.has_capacitor:
                    vc += il / c * dt

    return SimulationTrace(
        topology=topology,
        config=replace(cfg, t_total=t_total),
        t_total=t_total,
        v_c=v_c_trace,
        current=i_trace,
        e_c=e_c_trace,
        e_l=e_l_trace,
    )


def summarize(trace: SimulationTrace) -> TraceSummary:
    """Peak values and the final stored energy of a trace."""
    return TraceSummary(
        peak_v_c=float(np.max(np.abs(trace.v_c))),
        peak_current=float(np.max(np.abs(trace.current))),
        peak_e_c=float(np.max(trace.e_c)),
        peak_e_l=float(np.max(trace.e_l)),
        final_energy=float(trace.e_c[-1] + trace.e_l[-1]),
    )
