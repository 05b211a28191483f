"""Keyboard and swipe input mapped onto game session commands."""

from typing import Optional

from .game_session import GameSession, Screen
from .maze_generator import Direction

PAUSE = "pause"

KEY_BINDINGS: dict[str, str] = {
    "arrowup": Direction.UP.value,
    "w": Direction.UP.value,
    "arrowdown": Direction.DOWN.value,
    "s": Direction.DOWN.value,
    "arrowleft": Direction.LEFT.value,
    "a": Direction.LEFT.value,
    "arrowright": Direction.RIGHT.value,
    "d": Direction.RIGHT.value,
    "escape": PAUSE,
    "p": PAUSE,
}

SWIPE_THRESHOLD = 50


def command_for_key(key: str) -> Optional[str]:
    """Get the command bound to a key, ignoring case."""
    return KEY_BINDINGS.get(key.lower())


def handle_key(session: GameSession, key: str) -> bool:
    """
    Dispatch a key press to the session.

    Keys are ignored unless a round is being played.

    Returns:
        True if the key was bound and dispatched.
    """
    if session.screen != Screen.PLAYING:
        return False

    command = command_for_key(key)
    if command is None:
        return False

    if command == PAUSE:
        session.pause_game()
    else:
        session.move_player(command)
    return True


def direction_for_swipe(
    dx: float,
    dy: float,
    threshold: float = SWIPE_THRESHOLD,
) -> Optional[Direction]:
    """Resolve a swipe vector to a direction along its dominant axis."""
    if abs(dx) > abs(dy):
        if abs(dx) > threshold:
            return Direction.RIGHT if dx > 0 else Direction.LEFT
    elif abs(dy) > threshold:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None


def handle_swipe(session: GameSession, dx: float, dy: float) -> bool:
    """Move the player along a swipe. Returns True if the player moved."""
    direction = direction_for_swipe(dx, dy)
    if direction is None:
        return False
    return session.move_player(direction)
