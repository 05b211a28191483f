"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Maze Escape"
    app_version: str = "1.0.0"
    debug: bool = False

    # Best times
    best_times_backend: Literal["file", "redis", "memory"] = "file"
    best_times_path: str = os.path.join(BASE_DIR, "data", "best-times.json")
    best_times_key: str = "maze-escape-best-times"

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:3000,http://localhost:8080,http://127.0.0.1:5500"

    # Rate limiting
    rate_limit_sessions: int = 30  # new game sessions per minute per client

    # Sessions idle longer than this are dropped
    session_ttl_seconds: int = 1800

    # Game loop
    tick_interval_ms: int = 16  # ~60 frames per second

    # Fixed seed for reproducible mazes (unset = random)
    maze_seed: Optional[int] = None

    @field_validator("tick_interval_ms")
    @classmethod
    def validate_tick_interval(cls, v: int) -> int:
        """Reject tick intervals that would spin the event loop."""
        if v < 1:
            raise ValueError("TICK_INTERVAL_MS must be at least 1")
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        if self.debug:
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
