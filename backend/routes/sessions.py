"""Session routes: workbench state, history view and CSV export."""

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from backend.models import SessionResponse
from backend.session_store import get_store, load_session, session_response
from engine.history import csv_filename, export_csv, export_json

router = APIRouter()


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(request: Request):
    """Start a session with default workbench values and an empty history."""
    store = get_store(request)
    await store.cleanup_expired()
    session = await store.create_session()
    return session_response(session)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(request: Request, session_id: str):
    session = await load_session(request, session_id)
    return session_response(session)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(request: Request, session_id: str):
    if not await get_store(request).delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@router.get("/sessions/{session_id}/history/csv")
async def export_history_csv(
    request: Request,
    session_id: str,
    filename: str = Query("history", min_length=1, max_length=120),
):
    """Download the session history as CSV (Tool Name, Inputs, Results)."""
    session = await load_session(request, session_id)
    try:
        name = csv_filename(filename)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=export_csv(session.history),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


@router.get("/sessions/{session_id}/history/json")
async def export_history_json(request: Request, session_id: str):
    session = await load_session(request, session_id)
    return Response(content=export_json(session.history), media_type="application/json")
