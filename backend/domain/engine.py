"""
Simulation loop for the snake engine.

Every function takes the GameState it operates on, so several games can run
side by side and a host driver (timer, thread or event loop) only has to call
tick() with the current time and hand the returned events to its renderer.
"""

import logging
from typing import List

from .constants import DIRECTIONS, PORTAL
from .events import GameEvent, MOVED, GAME_OVER, REDRAW
from .game_state import GameState
from .food import BoardFullError
from .modes import get_mode_rules, validate_mode

logger = logging.getLogger(__name__)


def start_game(state: GameState, now_ms: float) -> List[GameEvent]:
    """Stopped -> Playing. Spawns portals in portal mode, otherwise moves the food."""
    state.is_playing = True
    state.last_move_time = now_ms

    if state.mode == PORTAL:
        events = [state.spawn_portals()]
    else:
        events = [state.respawn_food()]
    logger.info(f"Game started in {state.mode} mode")
    return events


def pause_game(state: GameState):
    """Playing -> Stopped, keeping snake and score. The move interval is reset."""
    state.is_playing = False
    state.move_interval = state.default_move_interval
    logger.info(f"Game paused at score {state.score}")


def reset_game(state: GameState):
    state.reset()


def stop_game(state: GameState):
    """Playing -> Stopped followed by a full reset."""
    state.is_playing = False
    reset_game(state)
    logger.info("Game stopped")


def set_mode(state: GameState, mode: str):
    """Switch mode. The game is stopped and reset, as from the mode menu."""
    state.mode = validate_mode(mode)
    state.is_playing = False
    reset_game(state)
    logger.info(f"Mode changed to {state.mode}")


def change_direction(state: GameState, command: str) -> bool:
    """
    Buffer a direction command for the next step.

    Commands are ignored unless the game is playing. Returns True if the
    snake accepted the new direction.

    Raises:
        ValueError: If command is not one of UP, DOWN, LEFT, RIGHT.
    """
    if command not in DIRECTIONS:
        raise ValueError(f"Unknown direction '{command}'. Valid moves: {', '.join(DIRECTIONS)}")
    if not state.is_playing:
        return False
    return state.snake.change_direction(DIRECTIONS[command])


def step(state: GameState) -> List[GameEvent]:
    """
    Execute one discrete step:
      1) Move the snake
      2) Check the mode's hazards (game over resets the game)
      3) Resolve food or portals for the mode (no free cell left ends the game)
    """
    rules = get_mode_rules(state.mode)

    head = state.snake.move()
    logger.debug(f"Snake moved to {head}")
    events = [GameEvent(MOVED, {"head": head, "length": len(state.snake)})]

    reason = rules.check_hazards(state)
    if reason is not None:
        final_score = state.score
        logger.info(f"Game Over! ({reason}) score={final_score} best={state.best_score}")
        events.append(GameEvent(GAME_OVER, {
            "reason": reason,
            "score": final_score,
            "best_score": state.best_score,
        }))
        stop_game(state)
        return events

    try:
        events.extend(rules.resolve(state))
    except BoardFullError as e:
        logger.info(f"Game Over! (board_full) score={state.score} best={state.best_score}: {e}")
        events.append(GameEvent(GAME_OVER, {
            "reason": "board_full",
            "score": state.score,
            "best_score": state.best_score,
        }))
        stop_game(state)
    return events


def tick(state: GameState, now_ms: float) -> List[GameEvent]:
    """
    Run one loop iteration at time now_ms.

    At most one step is taken per call, however many intervals have passed.
    Every tick that does not end the game asks for a redraw.
    """
    if not state.is_playing:
        return []

    events: List[GameEvent] = []
    if now_ms - state.last_move_time >= state.move_interval:
        events = step(state)
        if not state.is_playing:
            return events
        state.last_move_time = now_ms

    events.append(GameEvent(REDRAW))
    return events
