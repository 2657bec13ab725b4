"""
Domain entities for the snake game engine.

This module contains the core game entities and rules, independent of any
rendering or host loop.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTIONS,
    CLASSIC, WALLS, SPEED, PORTAL, NO_DIE,
)
from .snake import Snake
from .food import Food, BoardFullError, random_free_cell, spawn_portal_pair
from .game_state import GameState
from .events import GameEvent
from .modes import ModeRules, AVAILABLE_MODES, get_mode_rules, list_modes, validate_mode
from . import engine

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTIONS',
    'CLASSIC', 'WALLS', 'SPEED', 'PORTAL', 'NO_DIE',
    'Snake',
    'Food', 'BoardFullError', 'random_free_cell', 'spawn_portal_pair',
    'GameState',
    'GameEvent',
    'ModeRules', 'AVAILABLE_MODES', 'get_mode_rules', 'list_modes', 'validate_mode',
    'engine',
]
