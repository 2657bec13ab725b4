"""
Events emitted by the simulation loop for the renderer and score display.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

MOVED = "moved"
SCORE = "score"
SPEED = "speed"
WALL_ADDED = "wall_added"
TELEPORT = "teleport"
FOOD_SPAWNED = "food_spawned"
PORTALS_SPAWNED = "portals_spawned"
GAME_OVER = "game_over"
REDRAW = "redraw"


@dataclass
class GameEvent:
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)
