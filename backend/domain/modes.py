"""
Registry of game modes.

Maps each mode key to its rules: which hazards are lethal, how food (or a
portal) is consumed, and which extra effects fire when food is eaten.
To add a mode, write its hazard/effect functions and add an entry to
MODE_RULES.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .constants import CLASSIC, WALLS, SPEED, PORTAL, NO_DIE
from .events import GameEvent, TELEPORT
from .game_state import GameState

Hazard = Tuple[str, Callable[[GameState], bool]]
Effect = Callable[[GameState], GameEvent]


# -------------------------------
# Hazards
# -------------------------------

def out_of_bounds(state: GameState) -> bool:
    # Movement wraps, so this only fires if the head was placed off-grid.
    return state.snake.is_out_of_bounds(state.size, state.size)


def self_collision(state: GameState) -> bool:
    return state.snake.has_collided()


def hit_wall(state: GameState) -> bool:
    return state.snake.head in state.walls


BOUNDS_HAZARD: Hazard = ("bounds", out_of_bounds)
SELF_HAZARD: Hazard = ("self", self_collision)
WALL_HAZARD: Hazard = ("wall", hit_wall)


# -------------------------------
# Food resolvers
# -------------------------------

def eat_food(state: GameState, effects: Tuple[Effect, ...]) -> List[GameEvent]:
    """Grow and score when the head is on the food, then respawn it."""
    if state.snake.head != state.food.position:
        return []

    state.snake.grow()
    events = [state.add_point()]
    for effect in effects:
        events.append(effect(state))
    events.append(state.respawn_food())
    return events


def enter_portal(state: GameState, effects: Tuple[Effect, ...]) -> List[GameEvent]:
    """Teleport the head to the other portal, grow, score and respawn both portals."""
    if state.food_b is None:
        return []

    head = state.snake.head
    if head == state.food.position:
        target = state.food_b.position
    elif head == state.food_b.position:
        target = state.food.position
    else:
        return []

    state.snake.teleport(target)
    state.snake.grow()
    events = [
        GameEvent(TELEPORT, {"from": head, "to": target}),
        state.add_point(),
    ]
    for effect in effects:
        events.append(effect(state))
    events.append(state.spawn_portals())
    return events


@dataclass(frozen=True)
class ModeRules:
    """
    Rules for one game mode.

    Attributes:
        key: mode key (e.g. 'classic')
        description: short human-readable summary
        hazards: (reason, check) pairs; the first check that holds ends the game
        resolve_food: consumes food or portals after a move
        eat_effects: extra effects applied on every eat
    """
    key: str
    description: str
    hazards: Tuple[Hazard, ...]
    resolve_food: Callable[[GameState, Tuple[Effect, ...]], List[GameEvent]]
    eat_effects: Tuple[Effect, ...] = ()

    def check_hazards(self, state: GameState) -> Optional[str]:
        """Return the reason of the first lethal hazard, or None."""
        for reason, check in self.hazards:
            if check(state):
                return reason
        return None

    def resolve(self, state: GameState) -> List[GameEvent]:
        return self.resolve_food(state, self.eat_effects)


MODE_RULES: Dict[str, ModeRules] = {
    CLASSIC: ModeRules(
        key=CLASSIC,
        description="Classic: die on self-collision",
        hazards=(BOUNDS_HAZARD, SELF_HAZARD),
        resolve_food=eat_food,
    ),
    NO_DIE: ModeRules(
        key=NO_DIE,
        description="No-die: hazards are ignored",
        hazards=(),
        resolve_food=eat_food,
    ),
    WALLS: ModeRules(
        key=WALLS,
        description="Walls: every food eaten drops a new wall on the board",
        hazards=(BOUNDS_HAZARD, SELF_HAZARD, WALL_HAZARD),
        resolve_food=eat_food,
        eat_effects=(GameState.add_wall,),
    ),
    SPEED: ModeRules(
        key=SPEED,
        description="Speed: every food eaten makes the snake 10% faster",
        hazards=(BOUNDS_HAZARD, SELF_HAZARD),
        resolve_food=eat_food,
        eat_effects=(GameState.speed_up,),
    ),
    PORTAL: ModeRules(
        key=PORTAL,
        description="Portal: entering one portal exits through the other",
        hazards=(),
        resolve_food=enter_portal,
    ),
}

# Canonical list of available mode keys
AVAILABLE_MODES = list(MODE_RULES.keys())


def validate_mode(mode: Optional[str]) -> str:
    """
    Normalise and validate a mode key.

    Raises:
        ValueError: If mode is not recognized.
    """
    key = (mode or "").strip()
    if key not in MODE_RULES:
        available = ", ".join(AVAILABLE_MODES)
        raise ValueError(f"Unknown game mode '{mode}'. Available modes: {available}")
    return key


def get_mode_rules(mode: Optional[str]) -> ModeRules:
    return MODE_RULES[validate_mode(mode)]


def list_modes() -> list:
    """
    Return metadata about all available modes.

    Returns:
        List of dicts with 'key' and 'description' for each mode.
    """
    return [{"key": rules.key, "description": rules.description} for rules in MODE_RULES.values()]
