"""
Ray picking against the rendered pieces.

Pieces are drawn as boxes of edge ``piece_size`` centred on
``grid_position * spacing``. Orientations are always axis-aligned, so every
box is an axis-aligned box in world space and a slab test suffices.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .config import PIECE_SIZE, PIECE_SPACING
from .cube import CubeState
from .gesture import Hit


def intersect_box(origin: np.ndarray, direction: np.ndarray, center: np.ndarray,
                  half_size: float) -> Optional[Tuple[float, np.ndarray]]:
    """Distance along the ray and outward normal of the entry face, or None on a miss."""
    t_near, t_far = -math.inf, math.inf
    entry_axis = None
    for i in range(3):
        if abs(direction[i]) < 1e-12:
            if abs(origin[i] - center[i]) > half_size:
                return None
            continue
        t1 = (center[i] - half_size - origin[i]) / direction[i]
        t2 = (center[i] + half_size - origin[i]) / direction[i]
        if t1 > t2:
            t1, t2 = t2, t1
        if t1 > t_near:
            t_near = t1
            entry_axis = i
        t_far = min(t_far, t2)
        if t_near > t_far:
            return None
    # Rays starting inside a box do not pick it
    if entry_axis is None or t_near < 0:
        return None
    normal = np.zeros(3)
    normal[entry_axis] = -math.copysign(1.0, direction[entry_axis])
    return t_near, normal


def pick(cube: CubeState, origin, direction, spacing: float = PIECE_SPACING,
         piece_size: float = PIECE_SIZE) -> Optional[Hit]:
    """Nearest piece hit by the ray, as the Hit the gesture resolver consumes."""
    origin = np.asarray(origin, dtype=float)
    direction = np.asarray(direction, dtype=float)
    best = None
    for piece in cube.pieces:
        result = intersect_box(origin, direction, piece.grid_position * spacing, piece_size / 2.0)
        if result is None:
            continue
        if best is None or result[0] < best[0]:
            best = (result[0], piece, result[1])
    if best is None:
        return None
    distance, piece, normal = best
    return Hit(piece, origin + direction * distance, normal)
