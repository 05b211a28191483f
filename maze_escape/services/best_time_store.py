"""Best-time persistence backed by a JSON file, Redis, or memory."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import redis
from pydantic import TypeAdapter, ValidationError

from maze_escape.config import get_settings
from maze_escape.db.redis import get_redis

logger = logging.getLogger(__name__)

# Difficulty name -> best completion time in milliseconds
BestTimes = dict[str, int]

_best_times_adapter = TypeAdapter(BestTimes)


def parse_best_times(raw: Optional[str]) -> BestTimes:
    """
    Parse stored best times.

    Missing or corrupted content yields an empty mapping.
    """
    if not raw:
        return {}
    try:
        return _best_times_adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring corrupted best times: {e.error_count()} error(s)")
        return {}


class InMemoryBestTimeStore:
    """Best times kept in process memory."""

    def __init__(self, initial: Optional[BestTimes] = None):
        self._best_times: BestTimes = dict(initial or {})

    def load(self) -> BestTimes:
        return dict(self._best_times)

    def save(self, best_times: BestTimes) -> None:
        self._best_times = dict(best_times)


class JsonFileBestTimeStore:
    """Best times stored as a JSON object in a file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> BestTimes:
        """Load best times. Read failures yield an empty mapping."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load best times from {self.path}: {e}")
            return {}
        return parse_best_times(raw)

    def save(self, best_times: BestTimes) -> None:
        """Save best times. Write failures are logged and skipped."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(best_times, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Failed to save best times to {self.path}: {e}")


class RedisBestTimeStore:
    """Best times stored as a JSON string under a single Redis key."""

    def __init__(self, client: Optional[redis.Redis] = None, key: Optional[str] = None):
        self._redis = client
        self.key = key or get_settings().best_times_key

    def _get_redis(self) -> redis.Redis:
        """Get Redis client."""
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    def load(self) -> BestTimes:
        """Load best times. Connection and decode failures yield an empty mapping."""
        try:
            raw = self._get_redis().get(self.key)
        except (redis.RedisError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to load best times from Redis: {e}")
            return {}
        return parse_best_times(raw)

    def save(self, best_times: BestTimes) -> None:
        """Save best times. Connection failures are logged and skipped."""
        try:
            self._get_redis().set(self.key, json.dumps(best_times))
        except redis.RedisError as e:
            logger.warning(f"Failed to save best times to Redis: {e}")


def create_best_time_store(backend: Optional[str] = None):
    """Create the store selected by settings.best_times_backend."""
    settings = get_settings()
    backend = backend or settings.best_times_backend

    if backend == "redis":
        return RedisBestTimeStore(key=settings.best_times_key)
    if backend == "memory":
        return InMemoryBestTimeStore()
    if backend == "file":
        return JsonFileBestTimeStore(settings.best_times_path)
    raise ValueError(f"Unknown best times backend: {backend}")
