"""
FastAPI application and API routes for Keypad Calc.
"""

from collections import OrderedDict
from contextlib import asynccontextmanager
from uuid import UUID

import structlog
from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from keypad_calc import __version__
from keypad_calc.config import settings
from keypad_calc.engine import evaluate
from keypad_calc.log import configure_logging
from keypad_calc.models import (
    EvaluateRequest,
    EvaluateResponse,
    HistoryEntry,
    KeyPress,
    SessionState,
)
from keypad_calc.session import InvalidKeyError, KeypadSession

logger = structlog.get_logger()


class SessionRegistry:
    """In-memory keypad sessions, evicting the least recently used."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[UUID, KeypadSession] = OrderedDict()

    def create(self) -> KeypadSession:
        session = KeypadSession()
        self._sessions[session.session_id] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted keypad session", session_id=str(evicted))
        return session

    def get(self, session_id: UUID) -> KeypadSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def remove(self, session_id: UUID) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


registry = SessionRegistry(settings.max_sessions)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level, settings.json_logs)
    logger.info("Keypad Calc API starting", version=__version__)
    yield


app = FastAPI(
    title="Keypad Calc",
    description="Button-driven arithmetic evaluator",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for a browser keypad
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_registry() -> SessionRegistry:
    return registry


def get_session(
    session_id: UUID,
    sessions: SessionRegistry = Depends(get_registry),
) -> KeypadSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/api/v1/config")
async def get_config():
    """Get public configuration."""
    return {
        "app_name": settings.app_name,
        "precision": settings.precision,
        "empty_display": settings.empty_display,
        "error_text": settings.error_text,
        "strip_trailing_operator": settings.strip_trailing_operator,
        "history_limit": settings.history_limit,
    }


# =============================================================================
# Evaluation API
# =============================================================================

@app.post("/api/v1/evaluate", response_model=EvaluateResponse)
async def evaluate_expression(request: EvaluateRequest):
    """Evaluate a raw expression without touching any session."""
    result = evaluate(request.expression, places=settings.precision)
    return EvaluateResponse(
        expression=request.expression,
        result=result.value,
        error=result.error,
        display=result.display(settings.error_text),
    )


# =============================================================================
# Keypad Sessions API
# =============================================================================

@app.post("/api/v1/sessions", response_model=SessionState, status_code=201)
async def create_session(sessions: SessionRegistry = Depends(get_registry)):
    """Open a new keypad session with an empty screen."""
    session = sessions.create()
    logger.info("Created keypad session", session_id=str(session.session_id))
    return session.state()


@app.get("/api/v1/sessions/{session_id}", response_model=SessionState)
async def get_session_state(session: KeypadSession = Depends(get_session)):
    """Get what a keypad session's screen currently shows."""
    return session.state()


@app.delete("/api/v1/sessions/{session_id}", status_code=204)
async def delete_session(
    session_id: UUID,
    sessions: SessionRegistry = Depends(get_registry),
):
    """Close a keypad session."""
    if not sessions.remove(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@app.post("/api/v1/sessions/{session_id}/press", response_model=SessionState)
async def press_key(press: KeyPress, session: KeypadSession = Depends(get_session)):
    """Press one keypad button."""
    try:
        session.press(press.key)
    except InvalidKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.state()


@app.get("/api/v1/sessions/{session_id}/history", response_model=list[HistoryEntry])
async def get_history(session: KeypadSession = Depends(get_session)):
    """List evaluations made in this session, oldest first."""
    return session.get_history()


@app.delete("/api/v1/sessions/{session_id}/history", status_code=204)
async def clear_history(session: KeypadSession = Depends(get_session)):
    """Forget this session's evaluations."""
    session.clear_history()
    return Response(status_code=204)
