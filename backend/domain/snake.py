"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Tuple

from .constants import GRID_SIZE, START_POSITION, START_DIRECTION


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        size: grid size used for wrapping movement
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: unit vector applied on the next move
        is_growing: whether the next move keeps the tail
    """

    def __init__(
        self,
        size: int = GRID_SIZE,
        start: Tuple[int, int] = START_POSITION,
        direction: Tuple[int, int] = START_DIRECTION,
    ):
        self.size = size
        self.positions = deque([tuple(start)])
        self.direction = tuple(direction)
        self.is_growing = False

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def move(self) -> Tuple[int, int]:
        """Advance one cell, wrapping around the grid edges. Returns the new head."""
        hx, hy = self.head
        dx, dy = self.direction
        new_head = ((hx + dx) % self.size, (hy + dy) % self.size)

        if self.is_growing:
            self.is_growing = False
        else:
            self.positions.pop()

        self.positions.appendleft(new_head)
        return new_head

    def grow(self):
        self.is_growing = True

    def change_direction(self, new_direction: Tuple[int, int]) -> bool:
        """
        Buffer a new direction for the next move.

        Reversing straight into the neck is ignored. Returns True if the
        direction was accepted.
        """
        nx, ny = new_direction
        dx, dy = self.direction
        if (nx == -dx and ny == 0) or (ny == -dy and nx == 0):
            return False
        self.direction = (nx, ny)
        return True

    def teleport(self, position: Tuple[int, int]):
        """Replace the head segment in place."""
        self.positions[0] = tuple(position)

    def has_collided(self) -> bool:
        head = self.head
        return any(segment == head for segment in list(self.positions)[1:])

    def is_out_of_bounds(self, width: int, height: int) -> bool:
        x, y = self.head
        return x < 0 or y < 0 or x >= width or y >= height

    def is_occupying(self, position: Tuple[int, int]) -> bool:
        return tuple(position) in self.positions

    def __len__(self):
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head}, length={len(self)}, direction={self.direction}>"
