"""Resistor routes: E24 snapping and 4-band colour code."""

from fastapi import APIRouter, HTTPException, Request

from backend.models import (
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    ParseRequest,
    ParseResponse,
    SnapRequest,
    SnapResponse,
)
from backend.records import decode_record, encode_record
from backend.session_store import load_session, save_result, workbench_model
from engine.color_code import BandCode, UnsupportedRange, band_colours, decode, encode
from engine.components import engineering_notation, parse_engineering, snap_error_pct, snap_to_e24
from engine.errors import ValidationError
from engine.workbench import Workbench

router = APIRouter()


@router.post("/snap", response_model=SnapResponse)
async def snap_value(request: SnapRequest):
    """Nearest E24 value and the error it introduces."""
    snapped = snap_to_e24(request.value)
    return SnapResponse(
        target=request.value,
        snapped=snapped,
        error_pct=snap_error_pct(request.value, snapped),
        display=engineering_notation(snapped),
    )


@router.post("/parse", response_model=ParseResponse)
async def parse_value(request: ParseRequest):
    """Engineering text such as 4.7k or 100n to a value in base units."""
    try:
        value = parse_engineering(request.text)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ParseResponse(value=value, display=engineering_notation(value))


@router.post("/resistor/decode", response_model=DecodeResponse)
async def decode_bands(request: Request, body: DecodeRequest):
    """Colour bands → resistance. The decoded value becomes the workbench resistor."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()

    try:
        code = BandCode(d1=body.d1, d2=body.d2, exponent=body.multiplier)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    resistance = decode(code)
    workbench = workbench.updated(resistor=resistance)
    await save_result(request, session, workbench, decode_record(code, resistance))

    return DecodeResponse(
        resistance=resistance,
        display=engineering_notation(resistance, 'Ω'),
        bands=band_colours(code),
        tolerance_pct=code.tolerance_pct,
        workbench=workbench_model(workbench),
    )


@router.post("/resistor/encode", response_model=EncodeResponse)
async def encode_bands(request: Request, body: EncodeRequest):
    """Resistance → nearest E24 → colour bands."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()

    target = workbench.pick('resistor', body.resistance)
    if target <= 0:
        raise HTTPException(status_code=400, detail="Resistance must be positive")

    e24 = snap_to_e24(target)
    workbench = workbench.updated(resistor=e24)
    result = encode(e24)

    if isinstance(result, UnsupportedRange):
        # the snapped value still becomes the default; nothing is recorded
        await save_result(request, session, workbench, None)
        return EncodeResponse(
            target=target,
            e24=e24,
            e24_display=engineering_notation(e24, 'Ω'),
            supported=False,
            message=result.message,
            workbench=workbench_model(workbench),
        )

    await save_result(request, session, workbench, encode_record(target, e24, result))
    return EncodeResponse(
        target=target,
        e24=e24,
        e24_display=engineering_notation(e24, 'Ω'),
        supported=True,
        d1=result.d1,
        d2=result.d2,
        multiplier=result.exponent,
        bands=band_colours(result),
        workbench=workbench_model(workbench),
    )
