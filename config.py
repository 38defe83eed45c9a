# Global configuration constants for the visualizer

DEFAULT_REFERENCE_STRING = "7,0,1,2,0,3,0,4,2,3,0,3,2,1,2,0,1,7,0,1"  # Classic textbook example
DEFAULT_FRAME_COUNT = 3
MIN_FRAMES = 1
MAX_FRAMES = 10  # Upper bound of the frame slider

PLAYBACK_SPEEDS = (0.5, 1.0, 2.0, 4.0)  # Steps per second
DEFAULT_PLAYBACK_SPEED = 1.0

EVENT_LOG_LIMIT = 20  # Most recent events shown in the UI
