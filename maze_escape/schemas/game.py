"""Game schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class Point(BaseModel):
    """Schema for a cell coordinate."""

    x: int
    y: int


class Walls(BaseModel):
    """Schema for the four walls of a cell."""

    top: bool
    right: bool
    bottom: bool
    left: bool


class CellSchema(BaseModel):
    """Schema for a maze cell."""

    x: int
    y: int
    walls: Walls


class CollectibleSchema(BaseModel):
    """Schema for a collectible heart."""

    x: int
    y: int
    message: str
    collected: bool


class MazeSchema(BaseModel):
    """Schema for a generated maze."""

    width: int
    height: int
    cells: list[list[CellSchema]]
    start: Point
    end: Point
    collectibles: list[CollectibleSchema]


class StatsSchema(BaseModel):
    """Schema for round statistics."""

    start_time: int
    moves: int
    hearts_collected: int
    total_hearts: int


class RoundResultSchema(BaseModel):
    """Schema for the outcome of a won round."""

    elapsed_ms: int
    is_new_record: bool


class GameStateResponse(BaseModel):
    """Schema for a game session snapshot."""

    session_id: str
    screen: str  # start, playing, win, pause
    difficulty: str
    maze: Optional[MazeSchema] = None
    player: Point
    stats: StatsSchema
    collected_messages: list[str]
    best_times: dict[str, int]
    result: Optional[RoundResultSchema] = None
    elapsed_ms: int = 0


class StartGameRequest(BaseModel):
    """Schema for starting a round."""

    difficulty: str = Field("medium", pattern="^(easy|medium|hard)$")


class MoveRequest(BaseModel):
    """Schema for move request."""

    direction: str = Field(..., pattern="^(up|down|left|right)$")


class KeyRequest(BaseModel):
    """Schema for a key press."""

    key: str = Field(..., min_length=1, max_length=32)


class SwipeRequest(BaseModel):
    """Schema for a swipe gesture, in screen pixels."""

    dx: float
    dy: float


class CommandResponse(BaseModel):
    """Schema for the result of a command."""

    handled: bool
    state: GameStateResponse


class DifficultyInfo(BaseModel):
    """Schema for a difficulty level."""

    key: str
    label: str
    size: int
    best_time_ms: Optional[int] = None
    best_time: Optional[str] = None


class DifficultyListResponse(BaseModel):
    """Schema for the difficulty table."""

    difficulties: list[DifficultyInfo]


class BestTimesResponse(BaseModel):
    """Schema for stored best times."""

    best_times: dict[str, int]
