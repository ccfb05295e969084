"""Fixed policy values shared by the engine and its front ends."""

import math

MINIMUM_POINT_COUNT = 20

MAX_FOURIER_SERIES_TERMS = 100
SAMPLE_COUNT = 1000

PATHS_PADDING = 10.0
TERMINATOR_RADIUS = 3.0

# frequency components a user-authored term may use; 0 is the constant term
MIN_FREQUENCY_COMPONENT = -20
MAX_FREQUENCY_COMPONENT = 20

MIN_AMPLITUDE = -1.0
MAX_AMPLITUDE = 1.0
MIN_PHASE = 0.0
MAX_PHASE = 2 * math.pi

# RGBA in [0, 1]
DEFAULT_TERM_COLOR = (230 / 255, 160 / 255, 200 / 255, 1.0)
FALLBACK_TERM_COLOR = (0.0, 0.0, 1.0, 1.0)

# export media sizes: name -> (edge length, sample/line width multiplier)
MEDIA_SIZES = {
    "small": (480, 1),
    "medium": (720, 2),
    "large": (1080, 3),
}
