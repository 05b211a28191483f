"""Pytest configuration and fixtures."""

import random
from collections import deque
from typing import AsyncGenerator, Callable, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from maze_escape.api.routes.game import limiter
from maze_escape.core.game_session import GameSession
from maze_escape.core.maze_generator import Direction, Maze, Position
from maze_escape.main import app
from maze_escape.services.best_time_store import InMemoryBestTimeStore
from maze_escape.services.game_service import GameService, get_game_service


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryBestTimeStore:
    return InMemoryBestTimeStore()


@pytest.fixture
def session(store, clock) -> GameSession:
    """A game session with a seeded maze generator."""
    return GameSession(store, rng=random.Random(1234), clock=clock)


def find_path(maze: Maze, start: Position, target: Position) -> Optional[list[Direction]]:
    """Directions leading from start to target through open walls."""
    queue = deque([(start.x, start.y)])
    came_from: dict[tuple[int, int], tuple[tuple[int, int], Direction]] = {}
    seen = {(start.x, start.y)}

    while queue:
        x, y = queue.popleft()
        if (x, y) == (target.x, target.y):
            path = []
            node = (x, y)
            while node != (start.x, start.y):
                node, direction = came_from[node]
                path.append(direction)
            return list(reversed(path))

        cell = maze.cells[y][x]
        for direction in Direction:
            if cell.walls[direction.wall]:
                continue
            dx, dy = direction.delta
            nxt = (x + dx, y + dy)
            if nxt not in seen:
                seen.add(nxt)
                came_from[nxt] = ((x, y), direction)
                queue.append(nxt)

    return None


@pytest.fixture
def path_finder() -> Callable[[Maze, Position, Position], Optional[list[Direction]]]:
    """Breadth-first search over open walls."""
    return find_path


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with an empty rate limit window."""
    limiter.reset()
    yield


@pytest.fixture
def game_service() -> GameService:
    """Game service with in-memory best times and reproducible mazes."""
    return GameService(InMemoryBestTimeStore(), seed=42)


@pytest_asyncio.fixture(scope="function")
async def client(game_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_game_service] = lambda: game_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
