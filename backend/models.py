"""Pydantic models for Bench Calculator API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from engine.calculators import OhmsLawMode
from engine.gain import AmplifierMode
from engine.transient import CircuitTopology


# --- Session ---

class WorkbenchModel(BaseModel):
    """Last-used values that fill in omitted inputs."""
    voltage: float
    resistor: float
    capacitor: float
    current: float
    vf: float
    inductor: float


class RecordModel(BaseModel):
    tool_name: str
    details: str
    result: str


class SessionResponse(BaseModel):
    id: str
    workbench: WorkbenchModel
    history: list[RecordModel] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ToolRequest(BaseModel):
    """Base for tool requests; session_id ties the call to a workbench and history."""
    session_id: Optional[str] = None


class ToolResponse(BaseModel):
    workbench: WorkbenchModel


# --- E24 snap ---

class SnapRequest(BaseModel):
    value: float = Field(..., gt=0, description="Target value (any unit)")


class SnapResponse(BaseModel):
    target: float
    snapped: float
    error_pct: float
    display: str


class ParseRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Number with optional suffix, e.g. 4.7k")


class ParseResponse(BaseModel):
    value: float
    display: str


# --- Colour code ---

class DecodeRequest(ToolRequest):
    d1: int = Field(..., ge=0, le=9, description="First digit band")
    d2: int = Field(..., ge=0, le=9, description="Second digit band")
    multiplier: int = Field(..., ge=0, le=6, description="Multiplier exponent (x10^n)")


class DecodeResponse(ToolResponse):
    resistance: float
    display: str
    bands: list[str]
    tolerance_pct: float


class EncodeRequest(ToolRequest):
    resistance: Optional[float] = Field(None, gt=0, description="Target resistance (Ohms)")


class EncodeResponse(ToolResponse):
    target: float
    e24: float
    e24_display: str
    supported: bool
    d1: Optional[int] = None
    d2: Optional[int] = None
    multiplier: Optional[int] = None
    bands: Optional[list[str]] = None
    message: Optional[str] = None


# --- Bench calculators ---

class OhmsLawRequest(ToolRequest):
    mode: OhmsLawMode
    voltage: Optional[float] = None
    current: Optional[float] = None
    resistance: Optional[float] = Field(None, gt=0)
    snap_resistor: bool = Field(True, description="Snap R to the nearest E24 value first")


class OhmsLawResponse(ToolResponse):
    mode: OhmsLawMode
    value: float
    unit: str
    display: str


class DividerRequest(ToolRequest):
    vin: Optional[float] = None
    r1: Optional[float] = Field(None, ge=0)
    r2: Optional[float] = Field(None, ge=0)
    snap_resistors: bool = True


class DividerResponse(ToolResponse):
    vin: float
    r1: float
    r2: float
    vout: float


class LedRequest(ToolRequest):
    vs: Optional[float] = Field(None, description="Supply voltage (V)")
    vf: Optional[float] = Field(None, description="LED forward voltage (V)")
    current: Optional[float] = Field(None, description="Target LED current (A)")


class LedResponse(ToolResponse):
    r_ideal: float
    r_standard: float
    i_actual: float
    r_standard_display: str
    i_actual_display: str


# --- Transient ---

class TransientRequest(ToolRequest):
    topology: CircuitTopology
    vs: Optional[float] = Field(None, description="Step input voltage (V)")
    r: Optional[float] = Field(None, ge=0, description="Series resistance (Ohms)")
    l: Optional[float] = Field(None, description="Inductance (H)")
    c: Optional[float] = Field(None, description="Capacitance (F)")
    t_total: Optional[float] = Field(None, gt=0, description="Simulated time (s); automatic if omitted")
    snap_resistor: bool = True
    include_traces: bool = False
    max_points: int = Field(200, ge=2, le=1000, description="Downsampled trace length")
    render_charts: bool = False


class TransientSummaryModel(BaseModel):
    peak_v_c: float
    peak_current: float
    peak_e_c: float
    peak_e_l: float
    final_energy: float


class TraceModel(BaseModel):
    time: list[float]
    v_c: list[float]
    current: list[float]
    e_c: list[float]
    e_l: list[float]


class TransientResponse(ToolResponse):
    topology: CircuitTopology
    t_total: float
    vs: float
    r: float
    l: float
    c: float
    summary: TransientSummaryModel
    summary_text: str
    traces: Optional[TraceModel] = None
    charts: Optional[list[str]] = None


# --- Op-amp gain designer ---

class OpAmpRequest(ToolRequest):
    mode: AmplifierMode
    target_gain: float = Field(..., description="Target gain magnitude")
    max_error_pct: float = Field(2.0, gt=0, le=100, description="Near-miss listing threshold")


class GainPairModel(BaseModel):
    r1: float
    r2_ideal: float
    r2: float
    actual_gain: float
    error_pct: float
    r1_display: str
    r2_display: str


class OpAmpResponse(ToolResponse):
    mode: AmplifierMode
    target_gain: float
    best: Optional[GainPairModel] = None
    candidates: list[GainPairModel] = Field(default_factory=list)
    message: Optional[str] = None
