import argparse
import json
import logging
import random
import time
from typing import Callable, Dict, List, Optional

from domain import engine
from domain.events import GameEvent, MOVED, GAME_OVER, REDRAW
from domain.game_state import GameState
from players import Player, RandomPlayer
from render import CellRect, TextRenderer, build_frame
from settings import Settings, load_settings, validate_log_level

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class SnakeGame:
    """
    Binds one GameState to a clock and a renderer.

    Host loops (an animation callback, a timer or the headless simulation
    below) call update() once per frame; play/pause/exit controls map to
    start(), pause() and stop().
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], float]] = None,
        renderer: Optional[Callable[[GameState], None]] = None,
        seed: Optional[int] = None,
    ):
        self.settings = settings or Settings()
        self.clock = clock or monotonic_ms
        self.renderer = renderer
        self.death_reason: Optional[str] = None

        self.state = GameState(
            size=self.settings.grid_size,
            mode=self.settings.mode,
            rng=random.Random(seed),
            start_position=self.settings.start_position,
            move_interval=self.settings.move_interval_ms,
            min_move_interval=self.settings.min_move_interval_ms,
            speed_factor=self.settings.speed_factor,
        )

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def best_score(self) -> int:
        return self.state.best_score

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    def start(self) -> List[GameEvent]:
        if self.state.is_playing:
            return []
        self.death_reason = None
        return engine.start_game(self.state, self.clock())

    def pause(self):
        engine.pause_game(self.state)

    def stop(self):
        engine.stop_game(self.state)

    def set_mode(self, mode: str):
        engine.set_mode(self.state, mode)

    def handle_input(self, command: str) -> bool:
        return engine.change_direction(self.state, command)

    def frame(self) -> List[CellRect]:
        """Cells to draw for the current state at the configured cell size."""
        return build_frame(self.state, self.settings.cell_size)

    def update(self) -> List[GameEvent]:
        """Run one tick at the clock's current time and dispatch its events."""
        events = engine.tick(self.state, self.clock())
        for event in events:
            if event.kind == GAME_OVER:
                self.death_reason = event.data["reason"]
            elif event.kind == REDRAW and self.renderer is not None:
                self.renderer(self.state)
        return events


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    settings: Optional[Settings] = None,
    mode: Optional[str] = None,
    max_steps: int = 500,
    seed: Optional[int] = None,
    player: Optional[Player] = None,
    renderer: Optional[Callable[[GameState], None]] = None,
) -> Dict:
    """
    Runs a single headless game until game over or max_steps discrete steps.

    The clock is simulated: each tick advances it by the current move
    interval, so speed mode changes the simulated duration but not the
    number of steps.

    Returns:
        A dictionary summarizing the run.
    """
    now = [0.0]
    game = SnakeGame(settings, clock=lambda: now[0], renderer=renderer, seed=seed)
    if mode is not None:
        game.set_mode(mode)
    if player is None:
        player = RandomPlayer(random.Random(seed))

    game.start()

    steps = 0
    final_score = 0
    walls = 0
    move_interval = game.state.move_interval
    game_over = False

    while steps < max_steps:
        game.handle_input(player.get_move(game.state))
        now[0] += game.state.move_interval

        walls = len(game.state.walls)
        move_interval = game.state.move_interval
        events = game.update()

        if any(event.kind == MOVED for event in events):
            steps += 1

        over = [event for event in events if event.kind == GAME_OVER]
        if over:
            game_over = True
            final_score = over[0].data["score"]
            break

        final_score = game.state.score
        walls = len(game.state.walls)
        move_interval = game.state.move_interval

    if not game_over:
        game.pause()

    return {
        "mode": game.state.mode,
        "steps": steps,
        "score": final_score,
        "best_score": game.best_score,
        "game_over": game_over,
        "death_reason": game.death_reason,
        "walls": walls,
        "move_interval": move_interval,
        "elapsed_ms": now[0],
    }


# -------------------------------
# Main Entry Point
# -------------------------------
def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run a headless snake game driven by a random player."
    )
    parser.add_argument("--mode", type=str, default=None,
                        help="Game mode: classic, walls, speed, portal or no-die (default from settings)")
    parser.add_argument("--steps", type=int, default=500,
                        help="Maximum number of discrete steps")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for placement and the player")
    parser.add_argument("--config", type=str, default=None,
                        help="Optional YAML settings file")
    parser.add_argument("--render", action="store_true",
                        help="Print the board after every tick")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default from settings)")

    args = parser.parse_args(argv)

    if args.steps <= 0:
        parser.error("--steps must be positive")

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    try:
        log_level = validate_log_level(args.log_level or settings.log_level)
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        result = run_simulation(
            settings=settings,
            mode=args.mode,
            max_steps=args.steps,
            seed=args.seed,
            renderer=TextRenderer() if args.render else None,
        )
    except ValueError as e:
        parser.error(str(e))

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
