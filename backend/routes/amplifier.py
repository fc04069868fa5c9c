"""Amplifier route: op-amp gain resistor designer."""

from fastapi import APIRouter, HTTPException, Request

from backend.models import GainPairModel, OpAmpRequest, OpAmpResponse
from backend.records import opamp_record
from backend.session_store import load_session, save_result, workbench_model
from engine.components import engineering_notation
from engine.errors import ValidationError
from engine.gain import GainDesign, design_gain, gain_candidates
from engine.workbench import Workbench

router = APIRouter()


def _pair_model(design: GainDesign) -> GainPairModel:
    return GainPairModel(
        r1=design.r1,
        r2_ideal=design.r2_ideal,
        r2=design.r2,
        actual_gain=design.actual_gain,
        error_pct=design.error_pct,
        r1_display=engineering_notation(design.r1, 'Ω'),
        r2_display=engineering_notation(design.r2, 'Ω'),
    )


@router.post("/opamp-gain", response_model=OpAmpResponse)
async def opamp_gain_endpoint(request: Request, body: OpAmpRequest):
    """Best E24 R1/R2 pair for a target gain, plus the near misses under max_error_pct."""
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()

    try:
        best = design_gain(body.mode, body.target_gain)
        candidates = gain_candidates(body.mode, body.target_gain, body.max_error_pct)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if best is None:
        return OpAmpResponse(
            mode=body.mode,
            target_gain=body.target_gain,
            message="Unity gain: use a voltage follower (R2 = 0, R1 open)",
            workbench=workbench_model(workbench),
        )

    # R1 becomes the default resistor for the next tool
    workbench = workbench.updated(resistor=best.r1)
    await save_result(request, session, workbench, opamp_record(body.mode, body.target_gain, best))

    return OpAmpResponse(
        mode=body.mode,
        target_gain=body.target_gain,
        best=_pair_model(best),
        candidates=[_pair_model(c) for c in candidates],
        workbench=workbench_model(workbench),
    )
