"""
Frame building for renderers.

The engine never draws anything itself. build_frame() turns a GameState into
the coloured cells a renderer should paint (clear, then draw in order), and
TextRenderer prints the board for terminal runs.
"""

from dataclasses import dataclass
from typing import List, Tuple

from domain.constants import CELL_SIZE, PORTAL
from domain.game_state import GameState


class ColorScheme:
    """Cell colours"""

    SNAKE = "#00FF00"
    FOOD = "#FF0000"
    PORTAL = "#0000FF"
    WALL = "#808080"


@dataclass(frozen=True)
class CellRect:
    x: int
    y: int
    width: int
    height: int
    color: str


def _cell(position: Tuple[int, int], cell_size: int, color: str) -> CellRect:
    x, y = position
    return CellRect(x * cell_size, y * cell_size, cell_size, cell_size, color)


def build_frame(state: GameState, cell_size: int = CELL_SIZE) -> List[CellRect]:
    """
    Return the rectangles to draw for the current state, in draw order:
    snake, food, second portal (portal mode), walls.
    """
    frame = [_cell(segment, cell_size, ColorScheme.SNAKE) for segment in state.snake.positions]
    frame.append(_cell(state.food.position, cell_size, ColorScheme.FOOD))

    if state.mode == PORTAL and state.food_b is not None:
        frame.append(_cell(state.food_b.position, cell_size, ColorScheme.PORTAL))

    for wall in sorted(state.walls):
        frame.append(_cell(wall, cell_size, ColorScheme.WALL))
    return frame


class TextRenderer:
    """Print the board and scores after every redraw."""

    def __init__(self, stream=None):
        self.stream = stream

    def __call__(self, state: GameState):
        print(
            f"\n{state.print_board()}\nScore: {state.score}  Best: {state.best_score}\n",
            file=self.stream,
        )
