"""
Maze Escape Game Session

State machine for one player's game:

    start --start_game--> playing --reach end--> win
                            |  ^
                 pause_game |  | resume_game
                            v  |
                           pause

start_game is valid from every screen and reset_game returns to start.
Best times are kept per difficulty in an injected store.
"""

import copy
import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Protocol, Union

from .maze_generator import Direction, Maze, MazeGenerator, Position

logger = logging.getLogger(__name__)


class Screen(Enum):
    """Screens of the game."""
    START = "start"
    PLAYING = "playing"
    WIN = "win"
    PAUSE = "pause"


class Difficulty(Enum):
    """Difficulty levels, each a square maze."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def size(self) -> int:
        """Edge length of the maze grid."""
        sizes = {
            Difficulty.EASY: 9,
            Difficulty.MEDIUM: 15,
            Difficulty.HARD: 21,
        }
        return sizes[self]

    @property
    def label(self) -> str:
        """Human readable label."""
        return f"{self.value.capitalize()} ({self.size}×{self.size})"


class BestTimeStore(Protocol):
    """Persistence for best completion times, keyed by difficulty."""

    def load(self) -> dict[str, int]:
        ...

    def save(self, best_times: dict[str, int]) -> None:
        ...


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Stats:
    """Counters for the current round."""
    start_time: int = 0
    moves: int = 0
    hearts_collected: int = 0
    total_hearts: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "start_time": self.start_time,
            "moves": self.moves,
            "hearts_collected": self.hearts_collected,
            "total_hearts": self.total_hearts,
        }


@dataclass
class RoundResult:
    """Outcome of a won round."""
    elapsed_ms: int
    is_new_record: bool

    def to_dict(self) -> dict:
        return {"elapsed_ms": self.elapsed_ms, "is_new_record": self.is_new_record}


@dataclass
class GameState:
    """Everything a presentation layer may observe."""
    screen: Screen = Screen.START
    difficulty: Difficulty = Difficulty.MEDIUM
    maze: Optional[Maze] = None
    player: Position = field(default_factory=lambda: Position(0, 0))
    stats: Stats = field(default_factory=Stats)
    collected_messages: list[str] = field(default_factory=list)
    best_times: dict[str, int] = field(default_factory=dict)
    result: Optional[RoundResult] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "screen": self.screen.value,
            "difficulty": self.difficulty.value,
            "maze": self.maze.to_dict() if self.maze else None,
            "player": self.player.to_dict(),
            "stats": self.stats.to_dict(),
            "collected_messages": list(self.collected_messages),
            "best_times": dict(self.best_times),
            "result": self.result.to_dict() if self.result else None,
        }


@dataclass(frozen=True)
class LoopView:
    """The few fields a frame tick reads, without copying the maze."""
    screen: Screen
    player_x: int
    player_y: int
    start_time: int
    has_maze: bool


class GameSession:
    """
    Game session state machine.

    All mutation goes through the command methods; get_state() hands out
    copies.

    Example usage:
        session = GameSession(store, rng=random.Random(7))
        session.start_game("easy")
        session.move_player("right")
        snapshot = session.get_state()
    """

    def __init__(
        self,
        store: BestTimeStore,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = _now_ms,
    ):
        """
        Initialize a session on the start screen.

        Args:
            store: Best-time persistence.
            rng: Random source handed to the maze generator.
            clock: Returns the current time in milliseconds.
        """
        self._store = store
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._state = GameState()
        self._load_best_times()

    def get_state(self) -> GameState:
        """Return a snapshot of the session."""
        return copy.deepcopy(self._state)

    def loop_view(self) -> LoopView:
        """Return the screen, player and start time for a frame tick."""
        state = self._state
        return LoopView(
            screen=state.screen,
            player_x=state.player.x,
            player_y=state.player.y,
            start_time=state.stats.start_time,
            has_maze=state.maze is not None,
        )

    @property
    def screen(self) -> Screen:
        return self._state.screen

    def elapsed_ms(self) -> int:
        """Milliseconds since the current round started, frozen once won."""
        if self._state.maze is None:
            return 0
        if self._state.result is not None:
            return self._state.result.elapsed_ms
        return self._clock() - self._state.stats.start_time

    def start_game(self, difficulty: Union[Difficulty, str]) -> None:
        """
        Start a new round on a freshly generated maze.

        Args:
            difficulty: Difficulty or its name (easy, medium, hard).

        Raises:
            ValueError: If the difficulty is unknown.
        """
        difficulty = Difficulty(difficulty)
        size = difficulty.size
        maze = MazeGenerator(size, size, rng=self._rng).generate()

        state = self._state
        state.difficulty = difficulty
        state.maze = maze
        state.player = Position(maze.start.x, maze.start.y)
        state.stats = Stats(
            start_time=self._clock(),
            moves=0,
            hearts_collected=0,
            total_hearts=len(maze.collectibles),
        )
        state.collected_messages = []
        state.result = None
        state.screen = Screen.PLAYING

        logger.info(
            f"Started {difficulty.value} game ({size}x{size}, "
            f"{len(maze.collectibles)} hearts)"
        )

    def move_player(self, direction: Union[Direction, str]) -> bool:
        """
        Move the player one cell if no wall blocks the way.

        Args:
            direction: Direction or its name (up, down, left, right).

        Returns:
            True if the player moved.
        """
        state = self._state
        if state.maze is None or state.screen != Screen.PLAYING:
            return False

        try:
            direction = Direction(direction)
        except ValueError:
            logger.debug(f"Ignoring unknown direction: {direction!r}")
            return False

        maze = state.maze
        current = maze.cells[state.player.y][state.player.x]
        # Edge cells keep their outer walls, so this is also the bounds check
        if current.has_wall(direction.wall):
            return False

        state.player = state.player.move(direction)
        state.stats.moves += 1

        collectible = maze.collectible_at(state.player.x, state.player.y)
        if collectible:
            collectible.collected = True
            state.stats.hearts_collected += 1
            state.collected_messages.append(collectible.message)

        if (state.player.x, state.player.y) == (maze.end.x, maze.end.y):
            self.win_game()

        return True

    def win_game(self) -> bool:
        """
        Finish the round and record the time if it beats the best.

        Only a round on the playing screen can be won, so the result of a
        finished round is never overwritten.

        Returns:
            True if a new best time was set.
        """
        state = self._state
        if state.maze is None or state.screen != Screen.PLAYING:
            return False

        state.screen = Screen.WIN
        elapsed = self._clock() - state.stats.start_time
        key = state.difficulty.value
        best = state.best_times.get(key)
        is_new_record = best is None or elapsed < best

        if is_new_record:
            state.best_times[key] = elapsed
            self._save_best_times()
            logger.info(f"New best time for {key}: {elapsed}ms (previous: {best})")
        else:
            logger.info(f"Finished {key} in {elapsed}ms (best: {best}ms)")

        state.result = RoundResult(elapsed_ms=elapsed, is_new_record=is_new_record)
        return is_new_record

    def pause_game(self) -> None:
        """Pause a running round."""
        if self._state.screen == Screen.PLAYING:
            self._state.screen = Screen.PAUSE

    def resume_game(self) -> None:
        """Resume a paused round. The clock was never stopped."""
        if self._state.screen == Screen.PAUSE:
            self._state.screen = Screen.PLAYING

    def reset_game(self) -> None:
        """Return to the start screen and reload best times."""
        self._state = GameState()
        self._load_best_times()

    def _load_best_times(self) -> None:
        self._state.best_times = dict(self._store.load())

    def _save_best_times(self) -> None:
        self._store.save(dict(self._state.best_times))
