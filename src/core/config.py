"""
Application settings.

Defaults live on the model, overrides come from `CHESS_`-prefixed environment variables,
e.g. `CHESS_DATABASE_URL=sqlite:///games.db` or `CHESS_ENGINE_COMMAND=/usr/bin/stockfish`.
"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "CHESS_"
MIN_SKILL_LEVEL = 0
MAX_SKILL_LEVEL = 20


class Settings(BaseModel):
    database_url: str = "sqlite:///chess.db"
    default_skill_level: int = 5
    # Path to an external UCI engine. Leave unset to play against the built-in search.
    engine_command: Optional[str] = None
    engine_timeout_s: float = 10.0
    engine_movetime_ms: int = 1000
    log_level: str = "INFO"

    @field_validator("default_skill_level")
    @classmethod
    def validate_skill_level(cls, value: int) -> int:
        if not (MIN_SKILL_LEVEL <= value <= MAX_SKILL_LEVEL):
            raise ValueError(
                f"Skill level must be between {MIN_SKILL_LEVEL} and {MAX_SKILL_LEVEL}, got {value}"
            )
        return value

    @field_validator("engine_timeout_s", "engine_movetime_ms")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"Expected a positive value, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the fields that are set in the environment; pydantic takes care of the type conversion."""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**overrides)
