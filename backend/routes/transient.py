"""Transient route: RC/RL/LC/RLC step response."""

import logging

import numpy as np
from fastapi import APIRouter, HTTPException, Request

from backend.models import (
    TraceModel,
    TransientRequest,
    TransientResponse,
    TransientSummaryModel,
)
from backend.records import transient_record, transient_summary_text
from backend.session_store import load_session, save_result, workbench_model
from engine.components import snap_to_e24
from engine.errors import ValidationError
from engine.strip_chart import render_strip_chart
from engine.transient import CircuitTopology, SimulationConfig, SimulationTrace, simulate, summarize
from engine.workbench import Workbench

logger = logging.getLogger(__name__)

router = APIRouter()


def _downsample(trace: SimulationTrace, max_points: int) -> TraceModel:
    """Evenly spaced subset of the trace, from the first sample to the last."""
    total = len(trace.v_c)
    picks = np.linspace(0, total - 1, min(max_points, total)).round().astype(int)
    return TraceModel(
        time=trace.time[picks].tolist(),
        v_c=trace.v_c[picks].tolist(),
        current=trace.current[picks].tolist(),
        e_c=trace.e_c[picks].tolist(),
        e_l=trace.e_l[picks].tolist(),
    )


def _charts(trace: SimulationTrace) -> list[str]:
    """Loop current always; capacitor and energy charts where the part exists."""
    topology = trace.topology
    charts = [render_strip_chart(trace.current, trace.t_total, "Loop Current I(t)", "A")]
    if topology.has_capacitor:
        charts.append(render_strip_chart(trace.v_c, trace.t_total, "Capacitor Voltage Vc(t)", "V"))
        charts.append(render_strip_chart(trace.e_c, trace.t_total, "Stored Energy: Capacitor", "J"))
    if topology.has_inductor:
        charts.append(render_strip_chart(trace.e_l, trace.t_total, "Stored Energy: Inductor", "J"))
    return charts


@router.post("/transient", response_model=TransientResponse)
async def transient_endpoint(request: Request, body: TransientRequest):
    """
    Simulate the step response of a series circuit.

    Omitted component values come from the workbench. The time window is
    chosen automatically unless t_total is given.
    """
    session = await load_session(request, body.session_id)
    workbench = session.workbench if session else Workbench()
    topology = body.topology

    vs = workbench.pick('voltage', body.vs)
    r = workbench.pick('resistor', body.r) if topology.uses_resistor else 0.0
    if topology.uses_resistor and body.snap_resistor and r > 0:
        r = snap_to_e24(r)
    l = workbench.pick('inductor', body.l) if topology.has_inductor else 0.0
    c = workbench.pick('capacitor', body.c) if topology.has_capacitor else 0.0

    config = SimulationConfig(vs=vs, r=r, l=l, c=c, t_total=body.t_total)
    try:
        trace = simulate(topology, config)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    summary = summarize(trace)
    used = trace.config
    logger.info(
        "%s transient: Vs=%s R=%s L=%s C=%s over %.3g s",
        topology.name, vs, used.r, used.l, used.c, trace.t_total,
    )

    workbench = workbench.updated(
        voltage=vs,
        resistor=r if topology.uses_resistor else None,
        inductor=used.l if topology.has_inductor else None,
        capacitor=used.c if topology.has_capacitor else None,
    )
    await save_result(request, session, workbench, transient_record(topology, vs, summary))

    return TransientResponse(
        topology=topology,
        t_total=trace.t_total,
        vs=vs,
        r=used.r,
        l=used.l,
        c=used.c,
        summary=TransientSummaryModel(
            peak_v_c=summary.peak_v_c,
            peak_current=summary.peak_current,
            peak_e_c=summary.peak_e_c,
            peak_e_l=summary.peak_e_l,
            final_energy=summary.final_energy,
        ),
        summary_text=transient_summary_text(topology, summary),
        traces=_downsample(trace, body.max_points) if body.include_traces else None,
        charts=_charts(trace) if body.render_charts else None,
        workbench=workbench_model(workbench),
    )
