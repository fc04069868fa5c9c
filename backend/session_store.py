"""In-memory store of workbench sessions (workbench defaults + calculation history)."""

import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from backend.models import RecordModel, SessionResponse, WorkbenchModel
from engine.history import CalcHistory, CalcRecord
from engine.workbench import Workbench

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class WorkbenchSession(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    workbench: Workbench = Field(default_factory=Workbench)
    history: CalcHistory = Field(default_factory=CalcHistory)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class InMemorySessionStore:
    def __init__(self, ttl_hours: int = 24):
        self._sessions: dict[str, WorkbenchSession] = {}
        self._lock = asyncio.Lock()
        self._ttl = timedelta(hours=ttl_hours)

    async def create_session(self) -> WorkbenchSession:
        session = WorkbenchSession()
        async with self._lock:
            self._sessions[session.id] = session
        logger.info("Created session %s", session.id)
        return session

    async def get_session(self, session_id: str) -> Optional[WorkbenchSession]:
        async with self._lock:
            return self._sessions.get(session_id)

    async def update_session(self, session: WorkbenchSession) -> None:
        session.updated_at = _now()
        async with self._lock:
            self._sessions[session.id] = session

    async def delete_session(self, session_id: str) -> bool:
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

    async def cleanup_expired(self) -> int:
        now = _now()
        async with self._lock:
            expired = [sid for sid, s in self._sessions.items() if now - s.updated_at > self._ttl]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Dropped %d expired sessions", len(expired))
        return len(expired)


def get_store(request: Request) -> InMemorySessionStore:
    return request.app.state.session_store


async def load_session(request: Request, session_id: Optional[str]) -> Optional[WorkbenchSession]:
    """Session for a tool call, or None for a stateless call. Unknown ids are a 404."""
    if session_id is None:
        return None
    session = await get_store(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


async def save_result(
    request: Request,
    session: Optional[WorkbenchSession],
    workbench: Workbench,
    record: Optional[CalcRecord],
) -> None:
    """Store the updated workbench and append the record (if any), when the call has a session."""
    if session is None:
        return
    session.workbench = workbench
    if record is not None:
        session.history.append(record)
    await get_store(request).update_session(session)


def workbench_model(workbench: Workbench) -> WorkbenchModel:
    return WorkbenchModel(**workbench.to_dict())


def session_response(session: WorkbenchSession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        workbench=workbench_model(session.workbench),
        history=[
            RecordModel(tool_name=r.tool_name, details=r.details, result=r.result)
            for r in session.history
        ],
        created_at=session.created_at,
        updated_at=session.updated_at,
    )
