"""History record text for each tool. Fields are cut to length by CalcRecord."""

from engine.calculators import OhmsLawMode, OHMS_LAW_UNITS
from engine.color_code import BandCode, band_label
from engine.components import engineering_notation
from engine.gain import AmplifierMode, GainDesign
from engine.history import CalcRecord
from engine.transient import CircuitTopology, TraceSummary

_OHMS_LAW_TOOLS = {
    OhmsLawMode.VOLTAGE: "Ohm's Law (V)",
    OhmsLawMode.CURRENT: "Ohm's Law (I)",
    OhmsLawMode.RESISTANCE: "Ohm's Law (R)",
    OhmsLawMode.POWER: "Power Calc (P)",
}


def decode_record(code: BandCode, resistance: float) -> CalcRecord:
    label = band_label(code)
    return CalcRecord(
        tool_name="4-Band Decode",
        details=f"Bands={label} (b1={code.d1}, b2={code.d2}, mult=10^{code.exponent})",
        result=f"{engineering_notation(resistance)}Ohms +/- {code.tolerance_pct:g}% [{label}]",
    )


def encode_record(target: float, e24: float, code: BandCode) -> CalcRecord:
    label = band_label(code)
    e24_text = engineering_notation(e24)
    return CalcRecord(
        tool_name="4-Band Encode",
        details=f"Req={engineering_notation(target)}Ohms,E24={e24_text}Ohms,Bands={label}",
        result=f"{e24_text}Ohms -> {label} ({code.tolerance_pct:g}%, {code.tolerance})",
    )


def ohms_law_record(mode: OhmsLawMode, voltage, current, resistance, value: float) -> CalcRecord:
    if mode is OhmsLawMode.VOLTAGE:
        details = f"I={current:.3e}A, R={resistance:.1e}R"
    elif mode is OhmsLawMode.CURRENT:
        details = f"V={voltage:.2f}V, R={resistance:.1e}R"
    else:
        details = f"V={voltage:.2f}V, I={current:.3e}A"
    return CalcRecord(
        tool_name=_OHMS_LAW_TOOLS[mode],
        details=details,
        result=f"{engineering_notation(value)} {OHMS_LAW_UNITS[mode]}",
    )


def divider_record(vin: float, r1: float, r2: float, vout: float) -> CalcRecord:
    return CalcRecord(
        tool_name="Voltage Divider",
        details=f"Vin={vin:.2f}V, R1={r1:.1e}R, R2={r2:.1e}R",
        result=f"Vout={vout:.4f} V",
    )


def led_record(vs: float, vf: float, r_standard: float, i_actual: float) -> CalcRecord:
    return CalcRecord(
        tool_name="LED Resistor Calc",
        details=f"Vs={vs:.1f}V,Vf={vf:.1f}V->Rstd={r_standard:.2e}R",
        result=f"R_std={engineering_notation(r_standard)}, I_act={engineering_notation(i_actual)}A",
    )


def transient_summary_text(topology: CircuitTopology, summary: TraceSummary) -> str:
    """Only the energy terms that exist in the topology are reported."""
    if topology is CircuitTopology.RC:
        return f"PkV:{summary.peak_v_c:.1f}V Ec:{summary.peak_e_c:.2e}J"
    if topology is CircuitTopology.RL:
        return f"PkI:{summary.peak_current:.2e}A El:{summary.peak_e_l:.2e}J"
    return f"Ec:{summary.peak_e_c:.2e}J El:{summary.peak_e_l:.2e}J"


def transient_record(topology: CircuitTopology, vs: float, summary: TraceSummary) -> CalcRecord:
    return CalcRecord(
        tool_name="RLC Analyser",
        details=f"{topology.name} circuit, Vs={vs:.1f}V",
        result=transient_summary_text(topology, summary),
    )


def opamp_record(mode: AmplifierMode, target_gain: float, design: GainDesign) -> CalcRecord:
    mode_text = "Non-Inv" if mode is AmplifierMode.NON_INVERTING else "Inv"
    return CalcRecord(
        tool_name="Op-Amp Designer",
        details=f"{mode_text}, Tgt G={target_gain:.2f}",
        result=(
            f"R1={engineering_notation(design.r1)}, R2={engineering_notation(design.r2)}, "
            f"G={design.actual_gain:.2f}"
        ),
    )
