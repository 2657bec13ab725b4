"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import DIRECTIONS
from domain.game_state import GameState
from domain.modes import get_mode_rules
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that neither reverses the snake nor
    runs into a hazard that is lethal in the current mode.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake = game_state.snake
        head_x, head_y = snake.head
        dx, dy = snake.direction
        lethal = {reason for reason, _ in get_mode_rules(game_state.mode).hazards}

        # The tail moves out of the way unless the snake is growing
        body = list(snake.positions)
        if not snake.is_growing:
            body = body[:-1]

        # Reversing is ignored by the snake, so never pick it
        moves = [
            move for move, (mx, my) in DIRECTIONS.items()
            if (mx, my) != (-dx, -dy)
        ]

        safe_moves: List[str] = []
        for move in moves:
            mx, my = DIRECTIONS[move]
            cell = ((head_x + mx) % game_state.size, (head_y + my) % game_state.size)
            if "self" in lethal and cell in body:
                continue
            if "wall" in lethal and cell in game_state.walls:
                continue
            safe_moves.append(move)

        # If no safe moves, just return any move (we'll die anyway)
        if not safe_moves:
            return self.rng.choice(moves)

        return self.rng.choice(safe_moves)
