# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

import math

# Dedicated application logger name
LOGGER_NAME = "particle_sketch"

# Default window dimensions, used when the config does not set them
DEFAULT_WINDOW_WIDTH = 600  # Pixels
DEFAULT_WINDOW_HEIGHT = 600  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)

# Window Title
TITLE = "Particle Sketch"

# Color sequence generation
GOLDEN_RATIO_CONJUGATE = 0.618033988749895

# Particle lifecycle
LIFE_SPAN_DECAY = 2.0  # Life span units lost per tick, independent of frame duration

# Turbulence
FULL_TURN = 2.0 * math.pi
DEFAULT_NOISE_SCALE = 1.0 / 500.0
DEFAULT_NOISE_STRENGTH = 1.0 / 50.0

# Noise field visualisation
NOISE_GRID_STEP = 10.0  # Simulation units between arrows
NOISE_ARROW_LENGTH = 8.0  # Simulation units
NOISE_ARROW_WEIGHT = 1.0
NOISE_ARROW_COLOR = (0.0, 0.0, 1.0, 0.25)  # HSLA: white, mostly transparent

# Frame capture
CAPTURE_DIRECTORY = "frames"
