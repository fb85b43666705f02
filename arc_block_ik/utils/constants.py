"""
Shared constants for the arc_block_ik package.

Axis conventions follow a left-handed, Y-up engine frame: +Z is forward,
+Y is up.  Quaternions are stored scalar-last ``(x, y, z, w)``.
"""

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# Smoothing
# ---------------------------------------------------------------------------
# Frame rate the lerp multiplier is normalised against: at 60 Hz a
# multiplier of 1.0 moves the whole remaining distance each tick.
REFERENCE_RATE: float = 60.0
DEFAULT_SPEED_MULTIPLIER: float = 1.0

# ---------------------------------------------------------------------------
# Rail selection
# ---------------------------------------------------------------------------
NO_RAIL: int = -1

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
DEFAULT_DIRECTION: Tuple[float, float, float] = (0.0, 0.0, 1.0)
DIRECTION_EPSILON: float = 1e-6

# ---------------------------------------------------------------------------
# IK weights
# ---------------------------------------------------------------------------
WEIGHT_MIN: float = 0.0
WEIGHT_MAX: float = 1.0

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the top-down renderer
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (240, 240, 240)
COLOR_RAIL: Tuple[int, int, int] = (66, 133, 244)
COLOR_RAIL_ACTIVE: Tuple[int, int, int] = (15, 157, 88)
COLOR_IDEAL: Tuple[int, int, int] = (219, 68, 55)
COLOR_FOLLOW: Tuple[int, int, int] = (244, 180, 0)
COLOR_CHARACTER: Tuple[int, int, int] = (120, 120, 120)
COLOR_TEXT: Tuple[int, int, int] = (50, 50, 50)
