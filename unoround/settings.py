"""
Application settings.

Loads defaults from UNO_* environment variables using Pydantic Settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from unoround.engine.errors import ConfigurationError
from unoround.engine.game_state import DEFAULT_CARDS_PER_PLAYER

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Dealing
    cards_per_player: int = DEFAULT_CARDS_PER_PLAYER
    seed: Optional[int] = None

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="UNO_", env_ignore_empty=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value


def load_settings() -> Settings:
    """Build settings from the current environment.

    Raises:
        ConfigurationError: If a UNO_* variable has an invalid value.
    """
    try:
        return Settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"UNO_{str(error['loc'][0]).upper()}: {error['msg']}" for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid settings: {problems}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return load_settings()
