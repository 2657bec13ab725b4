"""
GameState aggregate - everything one game owns.
"""

import random
from typing import Optional, Set, Tuple

from .constants import (
    CLASSIC, PORTAL, GRID_SIZE, START_POSITION, START_DIRECTION,
    MOVE_INTERVAL_MS, MIN_MOVE_INTERVAL_MS, SPEED_FACTOR,
)
from .events import GameEvent, SCORE, SPEED, WALL_ADDED, FOOD_SPAWNED, PORTALS_SPAWNED
from .food import Food, random_free_cell, spawn_portal_pair
from .snake import Snake


class GameState:
    """
    The complete state of one game.

    Attributes:
        size: grid size (the grid is size x size)
        mode: one of the mode keys in domain.modes
        snake: the player's snake
        food: the food, or the first portal in portal mode
        food_b: the second portal (portal mode only, None otherwise)
        walls: set of (x, y) wall cells (walls mode)
        score, best_score: current score and best score across resets
        move_interval: milliseconds between discrete steps
        last_move_time: timestamp (ms) of the last committed step
        is_playing: whether the loop is running
        rng: random source for every placement
    """

    def __init__(
        self,
        size: int = GRID_SIZE,
        mode: str = CLASSIC,
        rng: Optional[random.Random] = None,
        start_position: Tuple[int, int] = START_POSITION,
        move_interval: float = MOVE_INTERVAL_MS,
        min_move_interval: float = MIN_MOVE_INTERVAL_MS,
        speed_factor: float = SPEED_FACTOR,
    ):
        self.size = size
        self.mode = mode
        self.rng = rng or random.Random()
        self.start_position = tuple(start_position)
        self.default_move_interval = move_interval
        self.min_move_interval = min_move_interval
        self.speed_factor = speed_factor

        self.best_score = 0
        self.is_playing = False
        self.last_move_time = 0.0

        self.food_b: Optional[Food] = None
        self.walls: Set[Tuple[int, int]] = set()
        self.reset()

    def reset(self):
        """Start over with a fresh snake. The best score is kept."""
        self.snake = Snake(self.size, self.start_position, START_DIRECTION)
        self.score = 0
        self.move_interval = self.default_move_interval
        self.walls = set()
        self.food_b = None
        self.food = Food(self.size, self.snake, rng=self.rng)

    def add_point(self) -> GameEvent:
        self.score += 1
        if self.score > self.best_score:
            self.best_score = self.score
        return GameEvent(SCORE, {"score": self.score, "best_score": self.best_score})

    def add_wall(self) -> GameEvent:
        """Place a wall on a cell free of snake, walls and the current food."""
        blocked = set(self.walls)
        blocked.add(self.food.position)
        if self.food_b is not None:
            blocked.add(self.food_b.position)
        wall = random_free_cell(self.size, self.rng, self.snake, blocked)
        self.walls.add(wall)
        return GameEvent(WALL_ADDED, {"position": wall, "walls": len(self.walls)})

    def speed_up(self) -> GameEvent:
        self.move_interval = max(self.min_move_interval, self.move_interval * self.speed_factor)
        return GameEvent(SPEED, {"move_interval": self.move_interval})

    def respawn_food(self) -> GameEvent:
        position = self.food.respawn(self.snake, self.walls)
        return GameEvent(FOOD_SPAWNED, {"position": position})

    def spawn_portals(self) -> GameEvent:
        self.food, self.food_b = spawn_portal_pair(self.size, self.snake, self.walls, self.rng)
        return GameEvent(
            PORTALS_SPAWNED,
            {"positions": (self.food.position, self.food_b.position)},
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        O = portal
        # = wall
        S = snake body
        H = snake head
        Row 0 is printed first (y grows downwards).
        """
        board = [['.' for _ in range(self.size)] for _ in range(self.size)]

        for wx, wy in self.walls:
            board[wy][wx] = '#'

        food_marker = 'O' if self.mode == PORTAL else 'F'
        fx, fy = self.food.position
        board[fy][fx] = food_marker
        if self.food_b is not None:
            bx, by = self.food_b.position
            board[by][bx] = 'O'

        for pos_idx, (x, y) in enumerate(self.snake.positions):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.size)]
        result.append("   " + " ".join(str(i % 10) for i in range(self.size)))
        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState mode={self.mode}, score={self.score}, best={self.best_score}, "
            f"length={len(self.snake)}, walls={len(self.walls)}, playing={self.is_playing}>"
        )
