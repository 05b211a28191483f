"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from maze_escape.core.game_session import GameSession
from maze_escape.services.game_service import GameService, get_game_service


# Type aliases for cleaner route signatures
Games = Annotated[GameService, Depends(get_game_service)]


def get_session_or_404(session_id: str, games: GameService) -> GameSession:
    """Look up a game session, raising 404 if it does not exist."""
    session = games.get_session(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return session
