"""
Game settings.

Values come from the environment (a .env file is loaded first) and may be
overridden by an optional YAML file:

    grid_size: 20
    cell_size: 20
    move_interval_ms: 200
    min_move_interval_ms: 50
    speed_factor: 0.9
    mode: classic
    log_level: INFO
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

from domain.constants import (
    GRID_SIZE, CELL_SIZE, MOVE_INTERVAL_MS, MIN_MOVE_INTERVAL_MS, SPEED_FACTOR, CLASSIC,
)
from domain.modes import validate_mode

load_dotenv()

ENV_VARS = {
    'grid_size': 'SNAKE_GRID_SIZE',
    'cell_size': 'SNAKE_CELL_SIZE',
    'move_interval_ms': 'SNAKE_MOVE_INTERVAL_MS',
    'min_move_interval_ms': 'SNAKE_MIN_MOVE_INTERVAL_MS',
    'speed_factor': 'SNAKE_SPEED_FACTOR',
    'mode': 'SNAKE_MODE',
    'log_level': 'SNAKE_LOG_LEVEL',
}


@dataclass
class Settings:
    grid_size: int = GRID_SIZE
    cell_size: int = CELL_SIZE
    move_interval_ms: float = MOVE_INTERVAL_MS
    min_move_interval_ms: float = MIN_MOVE_INTERVAL_MS
    speed_factor: float = SPEED_FACTOR
    mode: str = CLASSIC
    log_level: str = "INFO"

    @property
    def start_position(self) -> Tuple[int, int]:
        """Centre of the grid: (10, 10) on the default 20x20 board."""
        return (self.grid_size // 2, self.grid_size // 2)

    def validate(self):
        """
        Raises:
            ValueError: If any value is out of range or the mode is unknown.
        """
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.min_move_interval_ms <= 0:
            raise ValueError(f"min_move_interval_ms must be positive, got {self.min_move_interval_ms}")
        if self.move_interval_ms < self.min_move_interval_ms:
            raise ValueError(
                f"move_interval_ms ({self.move_interval_ms}) is below "
                f"min_move_interval_ms ({self.min_move_interval_ms})"
            )
        if not 0 < self.speed_factor <= 1:
            raise ValueError(f"speed_factor must be in (0, 1], got {self.speed_factor}")
        self.mode = validate_mode(self.mode)
        self.log_level = validate_log_level(self.log_level)


def validate_log_level(level) -> str:
    """
    Normalise a logging level name such as "info" to "INFO".

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    name = str(level).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level '{level}'")
    return name


def _coerce(name: str, value):
    target = {f.name: f.type for f in fields(Settings)}[name]
    try:
        if target is int:
            # whole numbers only (YAML can yield floats and bools)
            if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
                raise ValueError(value)
            return int(value)
        if target is float:
            return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for {name}: {value!r}")
    return str(value)


def load_yaml_settings(path: Union[str, Path]) -> dict:
    """Load overrides from a YAML settings file."""
    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    unknown = set(data) - set(ENV_VARS)
    if unknown:
        raise ValueError(f"Unknown settings in {path}: {', '.join(sorted(unknown))}")
    return data


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Build Settings from defaults, then environment variables, then the YAML file.

    Raises:
        ValueError: If a value cannot be parsed or fails validation.
    """
    values = {}
    for name, env_var in ENV_VARS.items():
        raw = os.getenv(env_var)
        if raw is not None and raw.strip() != "":
            values[name] = _coerce(name, raw.strip())

    if path is not None:
        for name, raw in load_yaml_settings(path).items():
            values[name] = _coerce(name, raw)

    settings = Settings(**values)
    settings.validate()
    return settings
