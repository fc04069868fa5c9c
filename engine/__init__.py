"""
Bench Calculator Engine

Core computation library for everyday electronics bench work: E24
resistor snapping, 4-band colour codes, RC/RL/LC/RLC step-response
simulation and op-amp gain resistor selection.

All math is deterministic and synchronous.
"""

from engine.errors import ValidationError
from engine.components import snap_to_e24, snap_resistor, engineering_notation, parse_engineering
from engine.color_code import BandCode, UnsupportedRange, encode, decode, band_colours, band_label
from engine.transient import CircuitTopology, SimulationConfig, SimulationTrace, simulate, summarize, auto_time_window
from engine.gain import AmplifierMode, GainDesign, design_gain, gain_candidates
from engine.calculators import OhmsLawMode, ohms_law, voltage_divider, led_resistor
from engine.history import CalcRecord, CalcHistory, export_csv, export_json
from engine.workbench import Workbench
from engine.strip_chart import render_strip_chart

__version__ = "0.1.0"
