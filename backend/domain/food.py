"""
Food and portal placement.

Positions are drawn uniformly at random and rejected while they land on the
snake, a wall or another excluded cell. Draws are bounded: once
MAX_PLACEMENT_ATTEMPTS is exhausted the free cells are enumerated instead, and
a board without any free cell raises BoardFullError.
"""

import logging
import random
from typing import Iterable, Optional, Tuple

from .constants import GRID_SIZE, MAX_PLACEMENT_ATTEMPTS
from .snake import Snake

logger = logging.getLogger(__name__)


class BoardFullError(RuntimeError):
    """Raised when no free cell is left for placing food, portals or walls."""


def random_free_cell(
    size: int,
    rng: random.Random,
    snake: Optional[Snake] = None,
    blocked: Iterable[Tuple[int, int]] = (),
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Tuple[int, int]:
    """
    Return a random cell (x, y) not occupied by the snake or any blocked cell.

    Args:
        size: grid size (the grid is size x size)
        rng: random source
        snake: snake whose segments must be avoided
        blocked: walls and any other cells to avoid
        max_attempts: random draws before enumerating the free cells

    Raises:
        BoardFullError: if every cell is occupied.
    """
    blocked = set(blocked)

    def is_free(cell):
        if snake is not None and snake.is_occupying(cell):
            return False
        return cell not in blocked

    for _ in range(max_attempts):
        cell = (rng.randrange(size), rng.randrange(size))
        if is_free(cell):
            return cell

    free_cells = [(x, y) for y in range(size) for x in range(size) if is_free((x, y))]
    if not free_cells:
        raise BoardFullError(f"No free cell left on the {size}x{size} grid")

    logger.warning(
        f"Placement fell back to enumeration after {max_attempts} draws "
        f"({len(free_cells)} free cells left)"
    )
    return rng.choice(free_cells)


class Food:
    """
    A single food item (or one end of a portal pair).

    Attributes:
        size: grid size the position was generated for
        position: current (x, y)
    """

    def __init__(
        self,
        size: int = GRID_SIZE,
        snake: Optional[Snake] = None,
        walls: Iterable[Tuple[int, int]] = (),
        rng: Optional[random.Random] = None,
        exclude: Iterable[Tuple[int, int]] = (),
    ):
        self.size = size
        self.rng = rng or random.Random()
        self.position = self.random_position(snake, walls, exclude)

    def random_position(
        self,
        snake: Optional[Snake] = None,
        walls: Iterable[Tuple[int, int]] = (),
        exclude: Iterable[Tuple[int, int]] = (),
    ) -> Tuple[int, int]:
        return random_free_cell(self.size, self.rng, snake, set(walls) | set(exclude))

    def respawn(
        self,
        snake: Optional[Snake] = None,
        walls: Iterable[Tuple[int, int]] = (),
        exclude: Iterable[Tuple[int, int]] = (),
    ) -> Tuple[int, int]:
        self.position = self.random_position(snake, walls, exclude)
        return self.position

    def __repr__(self):
        return f"<Food position={self.position}>"


def spawn_portal_pair(
    size: int,
    snake: Optional[Snake],
    walls: Iterable[Tuple[int, int]],
    rng: random.Random,
) -> Tuple[Food, Food]:
    """
    Create two portals on distinct free cells.

    The second portal is re-rolled away from the first by excluding the
    first portal's cell from its draws.
    """
    walls = set(walls)
    food_a = Food(size, snake, walls, rng)
    food_b = Food(size, snake, walls, rng, exclude=[food_a.position])
    return food_a, food_b
