"""
Engine configuration.

Pydantic validates the settings, so a typo in a log level or a broken starting placement fails at construction
time with a clear error rather than halfway through a game.
"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from src.core.exceptions import ConfigError, InvalidPlacementError
from src.engine.initializer import STANDARD_PLACEMENT, grid_from_placement


class EngineConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    log_level: str = "WARNING"
    # keep a MoveRecord for every completed move on the Board
    record_history: bool = True
    # piece placement part of a FEN string the new game starts from
    starting_placement: str = STANDARD_PLACEMENT

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("starting_placement")
    @classmethod
    def validate_starting_placement(cls, value: str) -> str:
        try:
            grid_from_placement(value)
        except InvalidPlacementError as e:
            raise ValueError(str(e)) from e
        return value


def load_config(raw_config: Mapping[str, Any] | None = None) -> EngineConfig:
    """Validate a plain mapping (ex. read from a settings file by the caller).

    Raises:
        ConfigError: If the configuration fails validation.
    """
    try:
        return EngineConfig(**(raw_config or {}))
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
