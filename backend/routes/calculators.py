"""Bench calculator routes: Ohm's law, voltage divider, LED resistor."""

from fastapi import APIRouter, HTTPException, Request

from backend.models import (
    DividerRequest,
    DividerResponse,
    LedRequest,
    LedResponse,
    OhmsLawRequest,
    OhmsLawResponse,
)
from backend.records import divider_record, led_record, ohms_law_record
from backend.session_store import load_session, save_result, workbench_model
from engine.calculators import OHMS_LAW_UNITS, OhmsLawMode, led_resistor, ohms_law, voltage_divider
from engine.components import engineering_notation, snap_to_e24
from engine.errors import ValidationError
from engine.workbench import Workbench

router = APIRouter()


@router.post("/ohms-law", response_model=OhmsLawResponse)
async def ohms_law_endpoint(request: Request, body: OhmsLawRequest):
    """Solve V = IR, I = V/R, R = V/I or P = VI; omitted operands come from the workbench."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()
    mode = body.mode

    voltage = workbench.pick('voltage', body.voltage)
    current = workbench.pick('current', body.current)
    resistance = workbench.pick('resistor', body.resistance)
    if body.snap_resistor and mode in (OhmsLawMode.VOLTAGE, OhmsLawMode.CURRENT):
        resistance = snap_to_e24(resistance)

    try:
        value = ohms_law(mode, voltage=voltage, current=current, resistance=resistance)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # inputs become the next defaults, then the result overrides its own field
    if mode is OhmsLawMode.VOLTAGE:
        workbench = workbench.updated(current=current, resistor=resistance, voltage=value)
    elif mode is OhmsLawMode.CURRENT:
        workbench = workbench.updated(voltage=voltage, resistor=resistance, current=value)
    elif mode is OhmsLawMode.RESISTANCE:
        workbench = workbench.updated(voltage=voltage, current=current, resistor=value)
    else:
        workbench = workbench.updated(voltage=voltage, current=current)

    await save_result(
        request, session, workbench,
        ohms_law_record(mode, voltage, current, resistance, value),
    )

    unit = OHMS_LAW_UNITS[mode]
    return OhmsLawResponse(
        mode=mode,
        value=value,
        unit=unit,
        display=f"{engineering_notation(value)} {unit}",
        workbench=workbench_model(workbench),
    )


@router.post("/voltage-divider", response_model=DividerResponse)
async def voltage_divider_endpoint(request: Request, body: DividerRequest):
    """Unloaded divider output, R1 on top."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()

    vin = workbench.pick('voltage', body.vin)
    r1 = workbench.pick('resistor', body.r1)
    r2 = workbench.pick('resistor', body.r2)
    if body.snap_resistors:
        r1 = snap_to_e24(r1) if r1 > 0 else r1
        r2 = snap_to_e24(r2) if r2 > 0 else r2

    try:
        vout = voltage_divider(vin, r1, r2)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    workbench = workbench.updated(voltage=vin, resistor=r2)
    await save_result(request, session, workbench, divider_record(vin, r1, r2, vout))

    return DividerResponse(vin=vin, r1=r1, r2=r2, vout=vout, workbench=workbench_model(workbench))


@router.post("/led-resistor", response_model=LedResponse)
async def led_resistor_endpoint(request: Request, body: LedRequest):
    """Series resistor for an LED, snapped to E24, with the resulting current."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()

    vs = workbench.pick('voltage', body.vs)
    vf = workbench.pick('vf', body.vf)
    current = workbench.pick('current', body.current)

    try:
        result = led_resistor(vs, vf, current)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    workbench = workbench.updated(
        voltage=vs, vf=vf, resistor=result.r_standard, current=result.i_actual,
    )
    await save_result(
        request, session, workbench,
        led_record(vs, vf, result.r_standard, result.i_actual),
    )

    return LedResponse(
        r_ideal=result.r_ideal,
        r_standard=result.r_standard,
        i_actual=result.i_actual,
        r_standard_display=engineering_notation(result.r_standard, 'Ω'),
        i_actual_display=engineering_notation(result.i_actual, 'A'),
        workbench=workbench_model(workbench),
    )
