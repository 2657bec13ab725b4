"""
Tests for domain/engine.py - the Stopped/Playing loop and tick gating.
"""

import os
import random
import sys
from collections import deque

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import engine  # noqa: E402
from domain.constants import CLASSIC, PORTAL, WALLS, NO_DIE, UP, LEFT, START_POSITION  # noqa: E402
from domain.events import MOVED, REDRAW, GAME_OVER, PORTALS_SPAWNED, FOOD_SPAWNED, TELEPORT  # noqa: E402
from domain.game_state import GameState  # noqa: E402


def started_state(mode=CLASSIC, now_ms=0.0, seed=0):
    state = GameState(size=20, mode=mode, rng=random.Random(seed))
    engine.start_game(state, now_ms)
    state.food.position = (0, 0)
    if state.food_b is not None:
        state.food_b.position = (0, 1)
    return state


def kinds(events):
    return [event.kind for event in events]


class TestStartPauseStop:
    """Tests for the loop's state transitions."""

    def test_new_state_is_stopped(self):
        """A fresh game is not playing and has no portals or walls."""
        state = GameState(rng=random.Random(0))
        assert state.is_playing is False
        assert state.food_b is None
        assert state.walls == set()
        assert state.move_interval == 200

    def test_start_classic_respawns_food(self):
        """Starting records the baseline time and moves the food."""
        state = GameState(rng=random.Random(0))
        events = engine.start_game(state, 1234.0)
        assert state.is_playing is True
        assert state.last_move_time == 1234.0
        assert kinds(events) == [FOOD_SPAWNED]
        assert state.food_b is None

    def test_start_portal_spawns_pair(self):
        """Starting in portal mode spawns two distinct portals."""
        state = GameState(mode=PORTAL, rng=random.Random(0))
        events = engine.start_game(state, 0.0)
        assert kinds(events) == [PORTALS_SPAWNED]
        assert state.food_b is not None
        assert state.food.position != state.food_b.position

    def test_start_respects_existing_walls(self):
        """Food respawned at start avoids the current walls."""
        state = GameState(size=3, mode=WALLS, rng=random.Random(0), start_position=(1, 1))
        state.walls = {(x, y) for x in range(3) for y in range(3)} - {(1, 1), (2, 2)}
        engine.start_game(state, 0.0)
        assert state.food.position == (2, 2)

    def test_pause_keeps_snake_and_score(self):
        """Pausing stops the loop and only resets the move interval."""
        state = started_state()
        state.score = 5
        state.move_interval = 120
        engine.tick(state, 200)
        head = state.snake.head

        engine.pause_game(state)

        assert state.is_playing is False
        assert state.score == 5
        assert state.snake.head == head
        assert state.move_interval == 200

    def test_stop_resets_but_keeps_best(self):
        """Stopping is a full reset; best score survives."""
        state = started_state(mode=WALLS)
        state.score = 6
        state.best_score = 6
        state.walls = {(1, 1)}
        state.move_interval = 90

        engine.stop_game(state)

        assert state.is_playing is False
        assert state.score == 0
        assert state.best_score == 6
        assert state.walls == set()
        assert state.move_interval == 200
        assert list(state.snake.positions) == [START_POSITION]

    def test_set_mode_stops_and_resets(self):
        """Changing mode while playing stops and resets the game."""
        state = started_state()
        state.score = 2
        engine.set_mode(state, PORTAL)
        assert state.mode == PORTAL
        assert state.score == 0
        assert state.is_playing is False
        assert state.food_b is None
        assert engine.tick(state, 10_000) == []

    def test_portals_work_after_mode_change(self):
        """Starting again after switching to portal mode spawns a working pair."""
        state = started_state()
        engine.set_mode(state, PORTAL)
        engine.start_game(state, 0.0)
        state.food.position = (11, 10)
        state.food_b.position = (3, 4)

        events = engine.tick(state, 200)

        assert TELEPORT in kinds(events)
        assert state.snake.head == (3, 4)
        assert state.score == 1

    def test_set_invalid_mode_raises_and_keeps_mode(self):
        """Unknown modes are rejected before anything changes."""
        state = started_state()
        state.score = 2
        with pytest.raises(ValueError):
            engine.set_mode(state, "zen")
        assert state.mode == CLASSIC
        assert state.score == 2


class TestDirectionInput:
    """Tests for change_direction()."""

    def test_input_ignored_while_stopped(self):
        """Commands do nothing unless the game is playing."""
        state = GameState(rng=random.Random(0))
        assert engine.change_direction(state, UP) is False
        assert state.snake.direction == (1, 0)

    def test_input_applied_while_playing(self):
        """UP points the snake towards lower y."""
        state = started_state()
        assert engine.change_direction(state, UP) is True
        assert state.snake.direction == (0, -1)

    def test_reverse_input_rejected(self):
        """LEFT while moving right is ignored."""
        state = started_state()
        assert engine.change_direction(state, LEFT) is False
        assert state.snake.direction == (1, 0)

    def test_unknown_command_raises(self):
        """Only the four directional commands are accepted."""
        state = started_state()
        with pytest.raises(ValueError):
            engine.change_direction(state, "JUMP")


class TestTick:
    """Tests for tick() gating."""

    def test_tick_while_stopped_is_noop(self):
        """No events and no movement when stopped."""
        state = GameState(rng=random.Random(0))
        assert engine.tick(state, 10_000) == []
        assert state.snake.head == START_POSITION

    def test_tick_before_interval_only_redraws(self):
        """Less than one interval elapsed: redraw without moving."""
        state = started_state(now_ms=1000)
        events = engine.tick(state, 1199)
        assert kinds(events) == [REDRAW]
        assert state.snake.head == START_POSITION
        assert state.last_move_time == 1000

    def test_tick_at_interval_steps_once(self):
        """Exactly one interval elapsed: one step then a redraw."""
        state = started_state(now_ms=1000)
        events = engine.tick(state, 1200)
        assert kinds(events) == [MOVED, REDRAW]
        assert state.snake.head == (11, 10)
        assert state.last_move_time == 1200

    def test_no_catch_up_steps(self):
        """Several elapsed intervals still give a single step."""
        state = started_state(now_ms=0)
        events = engine.tick(state, 1000)
        assert kinds(events).count(MOVED) == 1
        assert state.snake.head == (11, 10)
        assert state.last_move_time == 1000

        assert kinds(engine.tick(state, 1100)) == [REDRAW]
        assert state.snake.head == (11, 10)

    def test_game_over_tick_skips_redraw(self):
        """A lethal step stops the loop without a redraw."""
        state = started_state(mode=WALLS)
        state.walls = {(11, 10)}
        events = engine.tick(state, 200)
        assert kinds(events) == [MOVED, GAME_OVER]
        assert state.is_playing is False
        assert engine.tick(state, 400) == []

    def test_shorter_interval_steps_sooner(self):
        """The gate uses the current move interval."""
        state = started_state()
        state.move_interval = 50
        assert MOVED in kinds(engine.tick(state, 50))

    def test_independent_games(self):
        """Two states never share snake, food or score."""
        first = started_state(seed=1)
        second = started_state(seed=2)
        first.food.position = (11, 10)
        engine.tick(first, 200)
        assert first.score == 1
        assert second.score == 0
        assert second.snake.head == START_POSITION
        assert first.snake is not second.snake


class TestBoardFull:
    """Tests for running out of free cells."""

    def full_board_state(self, mode):
        """2x2 board: a growing three-cell snake with the food on the last free cell."""
        state = GameState(size=2, mode=mode, rng=random.Random(0), start_position=(0, 0))
        engine.start_game(state, 0.0)
        state.snake.positions = deque([(0, 0), (0, 1), (1, 1)])
        state.snake.direction = (1, 0)
        state.snake.is_growing = True
        state.food.position = (1, 0)
        state.best_score = 9
        return state

    @pytest.mark.parametrize("mode", [CLASSIC, NO_DIE, WALLS])
    def test_eating_the_last_cell_ends_the_game(self, mode):
        """With nowhere left to respawn food the game ends cleanly."""
        state = self.full_board_state(mode)

        events = engine.tick(state, 200)

        assert kinds(events)[-1] == GAME_OVER
        assert events[-1].data["reason"] == "board_full"
        assert events[-1].data["score"] == 1
        assert state.is_playing is False
        assert state.score == 0
        assert state.best_score == 9
        assert list(state.snake.positions) == [(0, 0)]
        assert state.snake.is_growing is False
        assert state.food.position != (0, 0)
        assert state.walls == set()
        assert engine.tick(state, 400) == []
