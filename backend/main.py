"""Bench Calculator Backend: FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routes import amplifier, calculators, resistor, sessions, transient
from backend.session_store import InMemorySessionStore

load_dotenv()

_log_level = os.getenv("LOG_LEVEL", "INFO").upper()
for _name in ("engine", "backend"):
    logging.getLogger(_name).setLevel(_log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    ttl_hours = int(os.getenv("SESSION_TTL_HOURS", "24"))
    store = InMemorySessionStore(ttl_hours=ttl_hours)
    app.state.session_store = store
    logger.info("Session store ready (ttl=%dh)", ttl_hours)
    yield


app = FastAPI(
    title="Bench Calculator API",
    description="Resistor, transient and amplifier calculators for the electronics bench",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origins
_frontend_url = os.getenv("FRONTEND_URL")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_frontend_url] if _frontend_url else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route modules
app.include_router(sessions.router, prefix="/api", tags=["Sessions"])
app.include_router(resistor.router, prefix="/api", tags=["Resistors"])
app.include_router(calculators.router, prefix="/api", tags=["Calculators"])
app.include_router(transient.router, prefix="/api", tags=["Transient"])
app.include_router(amplifier.router, prefix="/api", tags=["Amplifier"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "bench-calculator-backend"}
