"""
Runtime settings for the combat core.

Settings have sensible defaults and may be overridden from a JSON file; keys
missing from the file keep their default values.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from .constants import (
    DEFAULT_SPECIES,
    DEFAULT_TICK_INTERVAL_SECONDS,
    MAX_LOOP_BATTLES,
    MIN_LOOP_BATTLES,
    EnemySpecies,
)
from .error_handling import ContentError
from .logging import log_debug


class CombatSettings(BaseModel):
    """Tunable knobs of the battle engine and loop orchestrator."""

    tick_interval: float = Field(
        default=DEFAULT_TICK_INTERVAL_SECONDS,
        gt=0,
        description="Seconds of battle time advanced by each tick.",
    )
    min_loop_battles: int = Field(
        default=MIN_LOOP_BATTLES,
        ge=1,
        description="Smallest accepted number of battles in a loop.",
    )
    max_loop_battles: int = Field(
        default=MAX_LOOP_BATTLES,
        ge=1,
        description="Largest accepted number of battles in a loop.",
    )
    default_species: EnemySpecies = Field(
        default=DEFAULT_SPECIES,
        description="Species used when a request names an unsupported one.",
    )
    log_level: str = Field(
        default="INFO",
        description="Name of the logging level used by the entry point.",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "CombatSettings":
        if self.min_loop_battles > self.max_loop_battles:
            raise ValueError("min_loop_battles must not exceed max_loop_battles")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        return self

    @property
    def logging_level(self) -> int:
        """The numeric logging level for `log_level`."""
        return logging.getLevelName(self.log_level.upper())


def load_settings(path: Path | None = None) -> CombatSettings:
    """
    Loads settings from a JSON file, or returns the defaults.

    Args:
        path (Path | None): The settings file. None means defaults.

    Raises:
        ContentError: If the file cannot be read or holds invalid values.

    Returns:
        CombatSettings: The loaded settings.

    """
    if path is None:
        return CombatSettings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        settings = CombatSettings(**data)
    except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
        raise ContentError(f"Cannot load settings from {path}: {e}") from e
    log_debug("Loaded settings", {"path": path, **settings.model_dump(mode="json")})
    return settings
