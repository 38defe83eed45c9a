"""Tests for the playback controller used to scrub through a run."""

import pytest

from engine import InvalidInput
from playback import Playback


class TestNavigation:
    """Stepping forward, backward and jumping."""

    def test_starts_before_first_step(self) -> None:
        """A new playback sits at -1 and is paused."""
        pb = Playback(5)
        assert pb.position == -1
        assert not pb.started
        assert not pb.playing

    def test_step_forward_stops_at_end(self) -> None:
        """Stepping forward never runs past the last step."""
        pb = Playback(2)
        for _ in range(5):
            pb.step_forward()
        assert pb.position == 1
        assert pb.at_end

    def test_step_backward_stops_at_first_step(self) -> None:
        """Stepping back does not return to -1."""
        pb = Playback(3)
        pb.step_forward()
        pb.step_forward()
        pb.step_backward()
        pb.step_backward()
        pb.step_backward()
        assert pb.position == 0

    def test_skip_to_end_pauses(self) -> None:
        """Skipping to the end jumps to the last step and pauses."""
        pb = Playback(4)
        pb.toggle_play()
        pb.skip_to_end()
        assert pb.position == 3
        assert not pb.playing

    def test_reset(self) -> None:
        """Reset rewinds to before the first step."""
        pb = Playback(4)
        pb.skip_to_end()
        pb.reset()
        assert pb.position == -1


class TestAutoPlay:
    """Play/pause and timed advancing."""

    def test_tick_advances_until_end(self) -> None:
        """Ticks move one step each and stop playing at the end."""
        pb = Playback(3)
        pb.toggle_play()
        moves = [pb.tick() for _ in range(5)]
        assert moves == [True, True, True, False, False]
        assert pb.position == 2
        assert not pb.playing

    def test_tick_while_paused(self) -> None:
        """Paused playback does not move."""
        pb = Playback(3)
        assert pb.tick() is False
        assert pb.position == -1

    def test_play_at_end_restarts(self) -> None:
        """Pressing play on the last step restarts from the first step."""
        pb = Playback(3)
        pb.skip_to_end()
        pb.toggle_play()
        assert pb.position == 0
        assert pb.playing

    def test_toggle_pauses(self) -> None:
        """A second toggle pauses."""
        pb = Playback(3)
        pb.toggle_play()
        pb.toggle_play()
        assert not pb.playing

    def test_empty_run_never_plays(self) -> None:
        """There is nothing to play in an empty run."""
        pb = Playback(0)
        pb.toggle_play()
        assert not pb.playing
        assert pb.position == -1

    def test_speed_and_delay(self) -> None:
        """Delay is the inverse of the speed."""
        pb = Playback(3, speed=2.0)
        assert pb.delay == 0.5
        pb.set_speed(0.5)
        assert pb.delay == 2.0

    def test_unsupported_speed(self) -> None:
        """Only the configured speeds are accepted."""
        with pytest.raises(InvalidInput):
            Playback(3, speed=3.0)


class TestRunReplacement:
    """A new run must not inherit an out-of-range position."""

    def test_load_rewinds(self) -> None:
        """Loading a new run rewinds and pauses."""
        pb = Playback(10)
        pb.skip_to_end()
        pb.toggle_play()
        pb.load(4)
        assert pb.length == 4
        assert pb.position == -1
        assert not pb.playing

    def test_clamp_to_shorter_run(self) -> None:
        """Clamping pulls the position back inside the run."""
        pb = Playback(10)
        pb.skip_to_end()
        pb.length = 3
        pb.clamp()
        assert pb.position == 2

    def test_clamp_to_empty_run(self) -> None:
        """An empty run leaves only the -1 position."""
        pb = Playback(10)
        pb.step_forward()
        pb.length = 0
        pb.clamp()
        assert pb.position == -1

    def test_negative_length(self) -> None:
        """Run lengths cannot be negative."""
        with pytest.raises(InvalidInput):
            Playback(-1)
