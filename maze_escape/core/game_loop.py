"""
Frame updates for a running game.

The loop only reads a light view of the session. Its state (the interpolated player
position) is passed into each step and returned from it, and the loop ends
itself as soon as the session leaves the playing screen.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .game_session import GameSession, LoopView, Screen

logger = logging.getLogger(__name__)

CELL_SIZE = 30
INTERPOLATION = 0.2


def format_time(ms: int) -> str:
    """Format milliseconds as m:ss."""
    total_seconds = max(ms, 0) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


@dataclass(frozen=True)
class FrameState:
    """Interpolated player position in pixels."""
    x: float
    y: float

    @classmethod
    def at(cls, cell_x: int, cell_y: int) -> "FrameState":
        """Frame snapped onto a cell."""
        return cls(cell_x * CELL_SIZE, cell_y * CELL_SIZE)


@dataclass(frozen=True)
class Frame:
    """One rendered tick."""
    state: FrameState
    timer: str
    elapsed_ms: int

    def to_dict(self) -> dict:
        return {
            "type": "frame",
            "player": {"x": self.state.x, "y": self.state.y},
            "timer": self.timer,
            "elapsed_ms": self.elapsed_ms,
        }


def advance_frame(
    view: LoopView,
    previous: FrameState,
    now: int,
) -> Optional[Frame]:
    """
    Compute the next frame from the session's loop view.

    Args:
        view: Fields from GameSession.loop_view().
        previous: Frame state returned by the last step.
        now: Current time in milliseconds.

    Returns:
        The next frame, or None once the session is not playing.
    """
    if view.screen != Screen.PLAYING or not view.has_maze:
        return None

    target_x = view.player_x * CELL_SIZE
    target_y = view.player_y * CELL_SIZE
    state = FrameState(
        x=previous.x + (target_x - previous.x) * INTERPOLATION,
        y=previous.y + (target_y - previous.y) * INTERPOLATION,
    )
    elapsed = now - view.start_time
    return Frame(state=state, timer=format_time(elapsed), elapsed_ms=elapsed)


async def run_game_loop(
    session: GameSession,
    on_frame: Callable[[Frame], Awaitable[None]],
    interval: float = 1 / 60,
    clock: Optional[Callable[[], int]] = None,
) -> Optional[FrameState]:
    """
    Emit frames until the session stops playing.

    Args:
        session: Session to observe.
        on_frame: Coroutine called with each frame.
        interval: Seconds between ticks.
        clock: Millisecond clock, defaults to the session's elapsed time.

    Returns:
        The last frame state, or None if no frame was produced.
    """
    view = session.loop_view()
    frame_state = FrameState.at(view.player_x, view.player_y)
    last: Optional[FrameState] = None

    while True:
        view = session.loop_view()
        now = clock() if clock else view.start_time + session.elapsed_ms()
        frame = advance_frame(view, frame_state, now)
        if frame is None:
            logger.debug(f"Game loop stopped on screen {view.screen.value}")
            return last

        await on_frame(frame)
        frame_state = last = frame.state
        await asyncio.sleep(interval)
