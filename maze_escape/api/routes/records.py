"""Difficulty and best-time routes."""

from fastapi import APIRouter

from maze_escape.api.deps import Games
from maze_escape.core.game_loop import format_time
from maze_escape.core.game_session import Difficulty
from maze_escape.schemas.game import (
    BestTimesResponse,
    DifficultyInfo,
    DifficultyListResponse,
)

router = APIRouter(tags=["Records"])


@router.get(
    "/difficulties",
    response_model=DifficultyListResponse,
)
async def list_difficulties(games: Games) -> DifficultyListResponse:
    """List difficulty levels with their best times, easiest first."""
    best_times = games.best_times()

    difficulties = []
    for difficulty in Difficulty:
        best = best_times.get(difficulty.value)
        difficulties.append(
            DifficultyInfo(
                key=difficulty.value,
                label=difficulty.label,
                size=difficulty.size,
                best_time_ms=best,
                best_time=format_time(best) if best is not None else None,
            )
        )

    return DifficultyListResponse(difficulties=difficulties)


@router.get(
    "/best-times",
    response_model=BestTimesResponse,
)
async def get_best_times(games: Games) -> BestTimesResponse:
    """Get stored best times in milliseconds, keyed by difficulty."""
    return BestTimesResponse(best_times=games.best_times())
