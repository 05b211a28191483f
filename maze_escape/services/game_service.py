"""Registry of game sessions sharing one best-time store."""

import logging
import random
import time
import uuid
from typing import Callable, Optional

from maze_escape.config import get_settings
from maze_escape.core.game_session import BestTimeStore, GameSession
from maze_escape.services.best_time_store import create_best_time_store

logger = logging.getLogger(__name__)


class GameService:
    """Service for creating and looking up game sessions.

    Sessions idle for longer than session_ttl_seconds are dropped.
    """

    def __init__(
        self,
        store: BestTimeStore,
        seed: Optional[int] = None,
        session_ttl_seconds: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self._seed = seed
        self._ttl = session_ttl_seconds
        self._clock = clock
        self._sessions: dict[str, GameSession] = {}
        self._last_seen: dict[str, float] = {}

    def create_session(self, session_id: Optional[str] = None) -> tuple[str, GameSession]:
        """
        Create a new session on the start screen.

        Idle sessions are evicted first.

        Args:
            session_id: Optional custom session ID. If not provided, generates one.

        Returns:
            Tuple of (session_id, session)
        """
        self.evict_idle()

        if session_id is None:
            session_id = f"game_{uuid.uuid4().hex[:12]}"

        # A fixed seed gives each session its own reproducible sequence
        rng = random.Random(self._seed) if self._seed is not None else random.Random()
        session = GameSession(self.store, rng=rng)
        self._sessions[session_id] = session
        self._last_seen[session_id] = self._clock()
        logger.info(f"Created game session {session_id}")
        return session_id, session

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get session by ID and mark it active. Expired sessions are dropped."""
        session = self._sessions.get(session_id)
        if session is None:
            return None

        now = self._clock()
        if now - self._last_seen[session_id] > self._ttl:
            self._remove(session_id)
            logger.info(f"Game session {session_id} expired")
            return None

        self._last_seen[session_id] = now
        return session

    def end_session(self, session_id: str) -> bool:
        """End and remove a session."""
        if session_id in self._sessions:
            self._remove(session_id)
            logger.info(f"Ended game session {session_id}")
            return True
        return False

    def evict_idle(self) -> int:
        """Drop sessions idle past the TTL. Returns how many were dropped."""
        cutoff = self._clock() - self._ttl
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            self._remove(session_id)
        if expired:
            logger.info(f"Evicted {len(expired)} idle game session(s)")
        return len(expired)

    def session_count(self) -> int:
        return len(self._sessions)

    def best_times(self) -> dict[str, int]:
        """Best times as currently stored."""
        return self.store.load()

    def _remove(self, session_id: str) -> None:
        del self._sessions[session_id]
        del self._last_seen[session_id]


# Singleton instance
_game_service: Optional[GameService] = None


def get_game_service() -> GameService:
    """Get singleton game service."""
    global _game_service
    if _game_service is None:
        settings = get_settings()
        _game_service = GameService(
            create_best_time_store(),
            seed=settings.maze_seed,
            session_ttl_seconds=settings.session_ttl_seconds,
        )
    return _game_service
