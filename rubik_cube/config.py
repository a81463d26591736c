"""
Tunable constants and input sanitizers.

Every constant is passed through a sanitizer so an edited value outside its
sane range falls back to the default instead of breaking the engine.
"""
from __future__ import annotations

import math
import numbers
from typing import Optional, Union

Number = Union[int, float]

# -----------------------------
# Input Sanitization Functions
# -----------------------------

def sanitize_numeric_input(value: Optional[Number], min_val: Number, max_val: Number, default: Number) -> Number:
    """Clamp a number into [min_val, max_val]; non-numbers, NaN and inf give the default.

    Any real number is accepted, numpy scalars included.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return max(min_val, min(max_val, value))


def sanitize_size(size: object) -> int:
    """Coerce a requested cube size into the supported range."""
    if isinstance(size, numbers.Real) and not isinstance(size, (bool, numbers.Integral)):
        if math.isnan(size) or math.isinf(size):
            return DEFAULT_SIZE
        size = int(round(size))
    return int(sanitize_numeric_input(size, MIN_SIZE, MAX_SIZE, DEFAULT_SIZE))


# -----------------------------
# Cube / engine configuration
# -----------------------------
MIN_SIZE = 2
MAX_SIZE = 7
DEFAULT_SIZE = 3

AXES = ['x', 'y', 'z']

ROTATION_MS = sanitize_numeric_input(200, 0, 5000, 200)            # duration of a user turn
SCRAMBLE_ROTATION_MS = sanitize_numeric_input(60, 0, 1000, 60)     # duration of a scramble turn
LAYER_TOLERANCE = sanitize_numeric_input(1e-3, 1e-9, 0.25, 1e-3)   # layer membership slack

# Scramble length is max(MIN_SCRAMBLE_LENGTH, SCRAMBLE_MOVES_PER_SIZE * size)
MIN_SCRAMBLE_LENGTH = int(sanitize_numeric_input(20, 1, 500, 20))
SCRAMBLE_MOVES_PER_SIZE = int(sanitize_numeric_input(8, 1, 100, 8))

# -----------------------------
# Gesture configuration
# -----------------------------
MIN_DRAG_PX = sanitize_numeric_input(8, 1, 200, 8)                 # shorter drags are not a gesture yet
SAMPLE_OFFSET = sanitize_numeric_input(0.35, 0.01, 1.0, 0.35)      # sample distance along the drag tangent
PARALLEL_THRESHOLD = 0.9                                           # |up . normal| above this picks another up
DEGENERATE_PX = 1e-6                                               # projected lengths below this are unusable

# -----------------------------
# Front-end configuration
# -----------------------------
WINDOW_W = int(sanitize_numeric_input(1024, 400, 4096, 1024))
WINDOW_H = int(sanitize_numeric_input(720, 300, 2160, 720))
FPS = int(sanitize_numeric_input(60, 30, 120, 60))
PIECE_SPACING = sanitize_numeric_input(1.05, 1.0, 2.0, 1.05)       # centre-to-centre distance of pieces
PIECE_SIZE = sanitize_numeric_input(0.95, 0.1, 2.0, 0.95)          # edge length of each piece
ZOOM_SENS = sanitize_numeric_input(1.1, 1.01, 2.0, 1.1)
MOUSE_SENS = sanitize_numeric_input(0.3, 0.1, 2.0, 0.3)
MIN_CAM_DIST = 3.5
MAX_CAM_DIST = 40.0
MIN_PITCH = -89.0
MAX_PITCH = 89.0

# WCA colour scheme, keyed by face letter
COLORS = {
    'U': (0.97, 0.98, 0.99),   # white
    'D': (0.98, 0.80, 0.08),   # yellow
    'F': (0.13, 0.77, 0.37),   # green
    'B': (0.23, 0.51, 0.96),   # blue
    'R': (0.94, 0.27, 0.27),   # red
    'L': (0.98, 0.45, 0.09),   # orange
}
BASE_COLOR = (0.12, 0.16, 0.22)
