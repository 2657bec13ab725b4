"""
Player implementations for the snake game.

This module contains the player abstractions that steer the snake in
headless runs.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
