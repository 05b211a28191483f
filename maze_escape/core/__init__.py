# Core module
from .maze_generator import (
    Cell,
    Collectible,
    Direction,
    Maze,
    MazeGenerator,
    MESSAGE_POOL,
    Position,
    generate_maze,
)
from .game_session import (
    BestTimeStore,
    Difficulty,
    GameSession,
    GameState,
    LoopView,
    RoundResult,
    Screen,
    Stats,
)

__all__ = [
    "Cell",
    "Collectible",
    "Direction",
    "Maze",
    "MazeGenerator",
    "MESSAGE_POOL",
    "Position",
    "generate_maze",
    "BestTimeStore",
    "Difficulty",
    "GameSession",
    "GameState",
    "LoopView",
    "RoundResult",
    "Screen",
    "Stats",
]
