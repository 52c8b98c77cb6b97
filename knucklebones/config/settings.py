"""
Knucklebones - Application Settings

Loads configuration from environment variables (prefixed KNUCKLEBONES_)
and an optional .env file using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from knucklebones.engine.base import Difficulty


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Game
    difficulty: Difficulty = Difficulty.MEDIUM
    coin_flip: bool = True
    rng_seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="KNUCKLEBONES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lowercase_difficulty(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise log_level."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
