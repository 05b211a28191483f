"""Tests for keyboard and swipe controls."""

import pytest

from maze_escape.core import controls
from maze_escape.core.game_session import Screen
from maze_escape.core.maze_generator import Direction


class TestKeyBindings:
    """Tests for key lookup."""

    @pytest.mark.parametrize(
        "key,command",
        [
            ("ArrowUp", "up"),
            ("w", "up"),
            ("W", "up"),
            ("ArrowDown", "down"),
            ("s", "down"),
            ("ArrowLeft", "left"),
            ("a", "left"),
            ("ArrowRight", "right"),
            ("D", "right"),
            ("Escape", "pause"),
            ("p", "pause"),
        ],
    )
    def test_bound_keys(self, key, command):
        assert controls.command_for_key(key) == command

    @pytest.mark.parametrize("key", ["q", "Enter", " ", "ArrowUpp"])
    def test_unbound_keys(self, key):
        assert controls.command_for_key(key) is None


class TestHandleKey:
    """Tests for dispatching keys into a session."""

    def test_keys_ignored_outside_playing(self, session):
        """Test keys do nothing on the start screen."""
        assert controls.handle_key(session, "p") is False
        assert session.screen == Screen.START

    def test_pause_key(self, session):
        session.start_game("easy")
        assert controls.handle_key(session, "Escape") is True
        assert session.screen == Screen.PAUSE

        # Paused sessions ignore further keys, including pause
        assert controls.handle_key(session, "p") is False

    def test_blocked_move_key_is_still_handled(self, session):
        """Test a bound key reports handled even when a wall blocks it."""
        session.start_game("easy")
        assert controls.handle_key(session, "ArrowUp") is True
        assert session.get_state().stats.moves == 0

    def test_move_key(self, session):
        session.start_game("easy")
        cell = session.get_state().maze.cells[0][0]
        key = "d" if not cell.walls["right"] else "s"

        assert controls.handle_key(session, key) is True
        assert session.get_state().stats.moves == 1

    def test_unbound_key(self, session):
        session.start_game("easy")
        assert controls.handle_key(session, "x") is False


class TestSwipe:
    """Tests for swipe gestures."""

    @pytest.mark.parametrize(
        "dx,dy,expected",
        [
            (80, 10, Direction.RIGHT),
            (-80, 10, Direction.LEFT),
            (5, 120, Direction.DOWN),
            (5, -120, Direction.UP),
            (40, 0, None),
            (0, -50, None),
            (0, 0, None),
            (60, 60, Direction.DOWN),
        ],
    )
    def test_direction_for_swipe(self, dx, dy, expected):
        assert controls.direction_for_swipe(dx, dy) == expected

    def test_custom_threshold(self):
        assert controls.direction_for_swipe(20, 0, threshold=10) == Direction.RIGHT

    def test_swipe_moves_player(self, session):
        session.start_game("easy")
        cell = session.get_state().maze.cells[0][0]
        dx, dy = (100, 0) if not cell.walls["right"] else (0, 100)

        assert controls.handle_swipe(session, dx, dy) is True
        assert session.get_state().stats.moves == 1

    def test_short_swipe_does_nothing(self, session):
        session.start_game("easy")
        assert controls.handle_swipe(session, 10, 10) is False
        assert session.get_state().stats.moves == 0
