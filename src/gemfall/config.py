"""Game configuration loaded from JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from gemfall.constants import CLEAR_RATE, SWAP_RATE, WINDOW_HEIGHT, WINDOW_WIDTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "data" / "config.json"


class ConfigError(ValueError):
    """Raised when a configuration file or value is unusable."""


class ConfigBase(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"invalid {cls.__name__}: {exc}") from exc


class DifficultyStep(ConfigBase):
    score_threshold: int = Field(ge=0)
    fall_speed_multiplier: float = Field(default=1.0, gt=0, allow_inf_nan=False)
    new_type_chance: float = Field(default=0.0, ge=0.0, le=1.0)


class GameTexts(ConfigBase):
    title: str = "Gemfall"
    instructions: List[str] = Field(default_factory=lambda: [
        "Click a block, then click a neighbour to swap them.",
        "Line up three or more of a kind to clear them.",
        "Score as much as you can before time runs out!",
    ])
    game_over: str = "Time's up!"
    play_button: str = "Play"
    instructions_button: str = "How to play"
    back_button: str = "Back"
    retry_button: str = "Retry"


class GameConfig(ConfigBase):
    window_width: int = Field(default=WINDOW_WIDTH, gt=0)
    window_height: int = Field(default=WINDOW_HEIGHT, gt=0)
    rows: int = Field(default=8, ge=1)
    cols: int = Field(default=8, ge=1)
    match_length: int = Field(default=3, ge=2)
    initial_type_count: int = Field(default=4, ge=2)
    max_type_count: int = Field(default=6, ge=2)
    base_fall_speed: float = Field(default=8.0, gt=0, allow_inf_nan=False)
    swap_rate: float = Field(default=SWAP_RATE, gt=0, allow_inf_nan=False)
    clear_rate: float = Field(default=CLEAR_RATE, gt=0, allow_inf_nan=False)
    points_per_block: int = Field(default=10, ge=0)
    game_duration: float = Field(default=60.0, gt=0, allow_inf_nan=False)
    # steps[0] is the starting level.
    difficulty_steps: List[DifficultyStep] = Field(
        default_factory=lambda: [DifficultyStep(score_threshold=0)], min_length=1
    )
    texts: GameTexts = Field(default_factory=GameTexts)

    @model_validator(mode="after")
    def _check_consistency(self) -> "GameConfig":
        if self.max_type_count < self.initial_type_count:
            raise ValueError("max_type_count must be >= initial_type_count")
        thresholds = [step.score_threshold for step in self.difficulty_steps]
        if thresholds != sorted(thresholds):
            raise ValueError("difficulty_steps must be ordered by score_threshold")
        return self


def load_config(path: str | Path | None = None) -> GameConfig:
    """Read a JSON config file; the bundled defaults are used when ``path`` is None."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config file {config_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a JSON object")
    config = GameConfig.from_dict(data)
    logger.info("Loaded config from %s (%dx%d board)", config_path, config.rows, config.cols)
    return config
