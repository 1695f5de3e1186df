"""
Sessions router - tworzenie sesji i wykonywanie ruchów.

Każda sesja ma własny EventLogger; odpowiedź na ruch zawiera
zdarzenia tego ruchu, gotowe do animacji po stronie renderera.

Sesje żyją w pamięci procesu. Klient powinien zwolnić sesję przez
DELETE /sessions/{id}; po przekroczeniu MAX_SESSIONS najstarsza
sesja jest usuwana przy tworzeniu nowej.
"""

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import threading
import uuid

from hexmerge.core.config_loader import ConfigLoader
from hexmerge.core.coordinate import Axis
from hexmerge.events.event_logger import EventLogger
from hexmerge.input.keymap import Keymap
from hexmerge.session.game import GameSession


router = APIRouter()

_loader = ConfigLoader()


# ═══════════════════════════════════════════════════════════════════════════
# STORE
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class SessionEntry:
    """Sesja w pamięci wraz z loggerem i blokadą."""
    session: GameSession
    logger: EventLogger
    lock: threading.Lock = field(default_factory=threading.Lock)


MAX_SESSIONS = 1000

_sessions: Dict[str, SessionEntry] = {}
_sessions_lock = threading.Lock()


def clear_sessions() -> None:
    with _sessions_lock:
        _sessions.clear()


def _get_entry(session_id: str) -> SessionEntry:
    with _sessions_lock:
        entry = _sessions.get(session_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return entry


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class CreateSessionRequest(BaseModel):
    """Request do utworzenia sesji. Brakujące pola -> data/defaults.yaml."""
    diameter: Optional[int] = Field(default=None, ge=1, le=41)
    initial_values: Optional[List[int]] = None
    axes: Optional[List[str]] = None
    initial_tiles: Optional[int] = None
    seed: Optional[int] = None


class MoveRequest(BaseModel):
    """Ruch: para axis + direction albo klawisz z mapy."""
    axis: Optional[str] = None
    direction: Optional[int] = None
    key: Optional[str] = None
    keymap: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/sessions", status_code=status.HTTP_201_CREATED)
def create_session(request: CreateSessionRequest) -> Dict[str, Any]:
    """
    Tworzy i startuje nową sesję.

    Returns:
        Dict z id sesji, stanem i zdarzeniami startu
    """
    try:
        config = _loader.load_game_config(**request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    session = GameSession(config)
    logger = EventLogger()
    session.subscribe(logger)
    session.start()

    session_id = uuid.uuid4().hex
    with _sessions_lock:
        # dict trzyma kolejność wstawiania: pierwszy klucz to najstarsza sesja
        while len(_sessions) >= MAX_SESSIONS:
            del _sessions[next(iter(_sessions))]
        _sessions[session_id] = SessionEntry(session=session, logger=logger)

    return {
        "session_id": session_id,
        "state": session.snapshot(),
        "events": [e.to_dict() for e in logger.events],
    }


@router.get("/sessions/{session_id}")
def get_session(session_id: str) -> Dict[str, Any]:
    """Zwraca aktualny stan sesji."""
    entry = _get_entry(session_id)
    with entry.lock:
        return {"session_id": session_id, "state": entry.session.snapshot()}


@router.post("/sessions/{session_id}/moves")
def apply_move(session_id: str, request: MoveRequest) -> Dict[str, Any]:
    """
    Wykonuje ruch w sesji.

    Body: {"axis": "X", "direction": 1} albo {"key": "s"}.

    Returns:
        Dict z raportem ruchu, zdarzeniami ruchu i nowym stanem
    """
    entry = _get_entry(session_id)

    with entry.lock:
        try:
            axis, direction = _resolve_request(request, entry.session)
            first_event = len(entry.logger.events)
            report = entry.session.apply_move(axis, direction)
        except (ValueError, KeyError) as e:
            detail = e.args[0] if e.args else str(e)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(detail)
            ) from e

        return {
            "session_id": session_id,
            "axis": axis.value,
            "direction": direction,
            "report": report.to_dict(),
            "events": [e.to_dict() for e in entry.logger.events[first_event:]],
            "state": entry.session.snapshot(),
        }


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> Response:
    """Usuwa sesję z pamięci."""
    with _sessions_lock:
        removed = _sessions.pop(session_id, None)
    if removed is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ═══════════════════════════════════════════════════════════════════════════
# HELPERY
# ═══════════════════════════════════════════════════════════════════════════

def _resolve_request(request: MoveRequest, session: GameSession) -> tuple[Axis, int]:
    """
    Zamienia body ruchu na (oś, kierunek).

    Raises:
        ValueError: Brak axis/direction i key, albo niepoprawne wartości
        KeyError: Nieznany klawisz lub mapa
    """
    if request.key is not None:
        name = request.keymap
        if name is None:
            name = "three_axis" if Axis.Z in session.config.axes else "two_axis"
        keymap = Keymap.from_config(_loader.load_keymap(name))
        keymap.check_axes(session.config.axes)
        return keymap.resolve(request.key)

    if request.axis is None or request.direction is None:
        raise ValueError("Provide either 'key' or both 'axis' and 'direction'")
    return Axis.parse(request.axis), request.direction
