"""Game routes: the command and observation boundary for the browser client."""

import logging

from fastapi import APIRouter, Request, Response, WebSocket, WebSocketDisconnect, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from maze_escape.api.deps import Games, get_session_or_404
from maze_escape.config import get_settings
from maze_escape.core import controls
from maze_escape.core.game_loop import Frame, run_game_loop
from maze_escape.core.game_session import GameSession
from maze_escape.schemas.game import (
    CommandResponse,
    GameStateResponse,
    KeyRequest,
    MoveRequest,
    StartGameRequest,
    SwipeRequest,
)

logger = logging.getLogger(__name__)

settings = get_settings()
limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/game", tags=["Game"])


def _state_response(session_id: str, session: GameSession) -> GameStateResponse:
    return GameStateResponse(
        session_id=session_id,
        elapsed_ms=session.elapsed_ms(),
        **session.get_state().to_dict(),
    )


@router.post(
    "",
    response_model=GameStateResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(f"{settings.rate_limit_sessions}/minute")
async def create_game(request: Request, games: Games) -> GameStateResponse:
    """Create a new game session on the start screen."""
    session_id, session = games.create_session()
    return _state_response(session_id, session)


@router.get(
    "/{session_id}",
    response_model=GameStateResponse,
)
async def get_game(session_id: str, games: Games) -> GameStateResponse:
    """Get a snapshot of the session."""
    session = get_session_or_404(session_id, games)
    return _state_response(session_id, session)


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_game(session_id: str, games: Games) -> Response:
    """Discard a session."""
    get_session_or_404(session_id, games)
    games.end_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{session_id}/start",
    response_model=GameStateResponse,
)
async def start_game(
    session_id: str,
    request: StartGameRequest,
    games: Games,
) -> GameStateResponse:
    """Start a round on a new maze. Valid from every screen."""
    session = get_session_or_404(session_id, games)
    session.start_game(request.difficulty)
    return _state_response(session_id, session)


@router.post(
    "/{session_id}/move",
    response_model=CommandResponse,
)
async def move(
    session_id: str,
    request: MoveRequest,
    games: Games,
) -> CommandResponse:
    """Move the player one cell.

    Blocked moves and moves outside the playing screen change nothing and
    report handled=false.
    """
    session = get_session_or_404(session_id, games)
    moved = session.move_player(request.direction)
    return CommandResponse(handled=moved, state=_state_response(session_id, session))


@router.post(
    "/{session_id}/key",
    response_model=CommandResponse,
)
async def press_key(
    session_id: str,
    request: KeyRequest,
    games: Games,
) -> CommandResponse:
    """Dispatch a key press (arrows, WASD, P or Escape)."""
    session = get_session_or_404(session_id, games)
    handled = controls.handle_key(session, request.key)
    return CommandResponse(handled=handled, state=_state_response(session_id, session))


@router.post(
    "/{session_id}/swipe",
    response_model=CommandResponse,
)
async def swipe(
    session_id: str,
    request: SwipeRequest,
    games: Games,
) -> CommandResponse:
    """Move the player along a swipe gesture."""
    session = get_session_or_404(session_id, games)
    moved = controls.handle_swipe(session, request.dx, request.dy)
    return CommandResponse(handled=moved, state=_state_response(session_id, session))


@router.post(
    "/{session_id}/pause",
    response_model=GameStateResponse,
)
async def pause(session_id: str, games: Games) -> GameStateResponse:
    """Pause a running round."""
    session = get_session_or_404(session_id, games)
    session.pause_game()
    return _state_response(session_id, session)


@router.post(
    "/{session_id}/resume",
    response_model=GameStateResponse,
)
async def resume(session_id: str, games: Games) -> GameStateResponse:
    """Resume a paused round."""
    session = get_session_or_404(session_id, games)
    session.resume_game()
    return _state_response(session_id, session)


@router.post(
    "/{session_id}/reset",
    response_model=GameStateResponse,
)
async def reset(session_id: str, games: Games) -> GameStateResponse:
    """Return to the start screen."""
    session = get_session_or_404(session_id, games)
    session.reset_game()
    return _state_response(session_id, session)


@router.websocket("/{session_id}/ws")
async def game_websocket(websocket: WebSocket, session_id: str, games: Games):
    """WebSocket stream of frames while the round is being played.

    Messages are JSON:
    {"type": "frame", "player": {"x": 12.0, "y": 0.0}, "timer": "0:07", "elapsed_ms": 7021}

    Once the session leaves the playing screen the server sends
    {"type": "stopped", "screen": "..."} and closes the connection.
    """
    session = games.get_session(session_id)
    if session is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    async def send_frame(frame: Frame) -> None:
        await websocket.send_json(frame.to_dict())

    interval = settings.tick_interval_ms / 1000
    try:
        await run_game_loop(session, send_frame, interval=interval)
        await websocket.send_json({"type": "stopped", "screen": session.screen.value})
        await websocket.close()
    except WebSocketDisconnect:
        logger.debug(f"Frame stream for {session_id} disconnected")
