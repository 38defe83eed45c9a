# playback.py

from config import DEFAULT_PLAYBACK_SPEED, PLAYBACK_SPEEDS
from engine import InvalidInput


class Playback:
    """
    Step-by-step playback position over a simulation run.

    ``position`` is -1 before the first step and otherwise indexes the run,
    so it always stays within ``[-1, length - 1]``.
    """

    def __init__(self, length=0, speed=DEFAULT_PLAYBACK_SPEED):
        self.length = 0
        self.position = -1
        self.playing = False
        self.speed = DEFAULT_PLAYBACK_SPEED
        self.set_speed(speed)
        self.load(length)

    def __repr__(self):
        state = "playing" if self.playing else "paused"
        return f"<Playback {self.position + 1}/{self.length} {state} x{self.speed}>"

    # -----------------------------
    # Run lifecycle
    # -----------------------------
    def load(self, length):
        """Attach to a freshly computed run and rewind."""
        if length < 0:
            raise InvalidInput(f"run length cannot be negative: {length}")
        self.length = length
        self.reset()

    def clamp(self):
        self.position = max(-1, min(self.position, self.length - 1))
        if self.at_end:
            self.playing = False

    # -----------------------------
    # Navigation
    # -----------------------------
    @property
    def started(self):
        return self.position >= 0

    @property
    def at_start(self):
        return self.position <= 0

    @property
    def at_end(self):
        return self.position >= self.length - 1

    def step_forward(self):
        if not self.at_end:
            self.position += 1

    def step_backward(self):
        # Stepping back stops at the first step; only reset() rewinds to -1
        if self.position > 0:
            self.position -= 1

    def skip_to_end(self):
        self.position = self.length - 1
        self.playing = False

    def reset(self):
        self.position = -1
        self.playing = False

    # -----------------------------
    # Auto-play
    # -----------------------------
    def toggle_play(self):
        if self.length == 0:
            self.playing = False
        elif self.at_end:
            # Restart from the first step
            self.position = 0
            self.playing = True
        else:
            self.playing = not self.playing

    def tick(self):
        """
        Advance one step while playing.

        Returns:
            bool: True if the position moved
        """
        if not self.playing:
            return False
        if self.at_end:
            self.playing = False
            return False
        self.position += 1
        if self.at_end:
            self.playing = False
        return True

    def set_speed(self, speed):
        if speed not in PLAYBACK_SPEEDS:
            raise InvalidInput(f"unsupported playback speed: {speed!r}")
        self.speed = speed

    @property
    def delay(self):
        """Seconds between two automatic steps."""
        return 1.0 / self.speed
