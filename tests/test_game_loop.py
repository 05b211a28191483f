"""Tests for frame updates and the self-cancelling game loop."""

from unittest.mock import patch

import pytest

from maze_escape.core.game_loop import (
    CELL_SIZE,
    FrameState,
    advance_frame,
    format_time,
    run_game_loop,
)
from maze_escape.core.game_session import Screen


@pytest.mark.parametrize(
    "ms,expected",
    [
        (0, "0:00"),
        (999, "0:00"),
        (1_000, "0:01"),
        (59_999, "0:59"),
        (60_000, "1:00"),
        (754_000, "12:34"),
        (-5, "0:00"),
    ],
)
def test_format_time(ms, expected):
    assert format_time(ms) == expected


class TestAdvanceFrame:
    """Tests for a single frame step."""

    def test_no_frame_when_not_playing(self, session, clock):
        """Test the step reports None on the start screen."""
        assert advance_frame(session.loop_view(), FrameState(0, 0), clock.now) is None

    def test_no_frame_when_paused(self, session, clock):
        session.start_game("easy")
        session.pause_game()
        assert advance_frame(session.loop_view(), FrameState(0, 0), clock.now) is None

    def test_frame_interpolates_toward_player(self, session, clock):
        """Test the frame moves a fifth of the way to the player cell."""
        session.start_game("easy")
        cell = session.get_state().maze.cells[0][0]
        direction = "right" if not cell.walls["right"] else "down"
        session.move_player(direction)
        clock.advance(2_500)

        frame = advance_frame(session.loop_view(), FrameState.at(0, 0), clock.now)

        expected = CELL_SIZE * 0.2
        if direction == "right":
            assert frame.state == FrameState(pytest.approx(expected), 0)
        else:
            assert frame.state == FrameState(0, pytest.approx(expected))
        assert frame.timer == "0:02"
        assert frame.elapsed_ms == 2_500

    def test_frame_settles_on_player(self, session, clock):
        session.start_game("easy")
        frame = advance_frame(session.loop_view(), FrameState.at(0, 0), clock.now)
        assert frame.state == FrameState(0, 0)

    def test_frame_does_not_mutate_session(self, session, clock):
        session.start_game("easy")
        before = session.get_state()
        advance_frame(session.loop_view(), FrameState(100, 100), clock.now)
        assert session.get_state() == before

    def test_frame_to_dict(self, session, clock):
        session.start_game("easy")
        frame = advance_frame(session.loop_view(), FrameState.at(0, 0), clock.now)
        assert frame.to_dict() == {
            "type": "frame",
            "player": {"x": 0, "y": 0},
            "timer": "0:00",
            "elapsed_ms": 0,
        }


class TestRunGameLoop:
    """Tests for the async loop."""

    @pytest.mark.asyncio
    async def test_loop_returns_immediately_when_not_playing(self, session):
        frames = []

        async def on_frame(frame):
            frames.append(frame)

        result = await run_game_loop(session, on_frame, interval=0)
        assert result is None
        assert frames == []

    @pytest.mark.asyncio
    async def test_loop_stops_after_pause(self, session, clock):
        """Test the loop ends itself once the session leaves playing."""
        session.start_game("easy")
        frames = []

        async def on_frame(frame):
            frames.append(frame)
            clock.advance(1_000)
            if len(frames) == 3:
                session.pause_game()

        result = await run_game_loop(session, on_frame, interval=0, clock=clock)

        assert len(frames) == 3
        assert result == frames[-1].state
        assert [f.timer for f in frames] == ["0:00", "0:01", "0:02"]
        assert session.screen == Screen.PAUSE

    @pytest.mark.asyncio
    async def test_loop_stops_after_win(self, session, path_finder):
        session.start_game("easy")
        state = session.get_state()
        path = path_finder(state.maze, state.player, state.maze.end)
        frames = []

        async def on_frame(frame):
            frames.append(frame)
            session.move_player(path[len(frames) - 1])

        await run_game_loop(session, on_frame, interval=0)

        assert len(frames) == len(path)
        assert session.screen == Screen.WIN

    @pytest.mark.asyncio
    async def test_loop_does_not_copy_state(self, session, clock):
        """Test ticks read the loop view instead of a full snapshot."""
        session.start_game("easy")
        frames = []

        async def on_frame(frame):
            frames.append(frame)
            if len(frames) == 5:
                session.pause_game()

        with patch.object(session, "get_state", wraps=session.get_state) as get_state:
            await run_game_loop(session, on_frame, interval=0, clock=clock)

        assert len(frames) == 5
        get_state.assert_not_called()


class TestLoopView:
    """Tests for the per-tick session view."""

    def test_view_before_start(self, session):
        view = session.loop_view()
        assert view.screen == Screen.START
        assert view.has_maze is False

    def test_view_tracks_player(self, session, clock):
        clock.advance(500)
        session.start_game("easy")
        cell = session.get_state().maze.cells[0][0]
        direction = "right" if not cell.walls["right"] else "down"
        session.move_player(direction)

        view = session.loop_view()
        player = session.get_state().player
        assert (view.player_x, view.player_y) == (player.x, player.y)
        assert view.start_time == clock.now
        assert view.screen == Screen.PLAYING
        assert view.has_maze is True
