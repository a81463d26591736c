"""
Piece model: one visible sub-cube with a grid position and an orientation basis.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

AXIS_INDEX = {'x': 0, 'y': 1, 'z': 2}

# Axis vectors used for rotations
AXIS_VECTORS = {
    'x': np.array((1.0, 0.0, 0.0)),
    'y': np.array((0.0, 1.0, 0.0)),
    'z': np.array((0.0, 0.0, 1.0)),
}

# Outer faces: letter -> (axis, side)
FACE_AXES: Dict[str, Tuple[str, int]] = {
    'R': ('x', +1),
    'L': ('x', -1),
    'U': ('y', +1),
    'D': ('y', -1),
    'F': ('z', +1),
    'B': ('z', -1),
}


def rotation_matrix(axis: str, angle: float) -> np.ndarray:
    """Right-handed rotation by angle (radians) about a cube axis."""
    c, s = math.cos(angle), math.sin(angle)
    if axis == 'x':
        return np.array(((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c)))
    if axis == 'y':
        return np.array(((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c)))
    if axis == 'z':
        return np.array(((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0)))
    raise ValueError(f"unknown axis {axis!r}")


def grid_offset(half: float) -> float:
    """0 for odd sizes (integer grid), 0.5 for even sizes (half-integer grid)."""
    return 0.5 if (2 * half) % 2 == 1 else 0.0


def snap_coordinates(values: np.ndarray, half: float) -> np.ndarray:
    """Snap each component to the nearest member of {-half, ..., +half}."""
    offset = grid_offset(half)
    snapped = np.round(np.asarray(values, dtype=float) - offset) + offset
    return np.clip(snapped, -half, half) + 0.0


def snap_basis(basis: np.ndarray) -> np.ndarray:
    """Snap a rotated basis back to exact -1/0/1 entries."""
    return np.clip(np.rint(basis), -1.0, 1.0) + 0.0


def _frozen(values: np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


@dataclass(eq=False)
class Piece:
    grid_position: np.ndarray
    orientation: np.ndarray = field(default_factory=lambda: np.eye(3))
    initial_grid_position: Optional[np.ndarray] = None
    initial_orientation: Optional[np.ndarray] = None

    def __post_init__(self):
        self.grid_position = np.array(self.grid_position, dtype=float)
        self.orientation = np.array(self.orientation, dtype=float)
        if self.grid_position.shape != (3,):
            raise ValueError("grid_position must be a 3-vector")
        if self.orientation.shape != (3, 3):
            raise ValueError("orientation must be a 3x3 basis")
        # Initial fields are captured once and never written again
        if self.initial_grid_position is None:
            self.initial_grid_position = self.grid_position
        if self.initial_orientation is None:
            self.initial_orientation = self.orientation
        self.initial_grid_position = _frozen(self.initial_grid_position)
        self.initial_orientation = _frozen(self.initial_orientation)

    def coordinate(self, axis: str) -> float:
        return float(self.grid_position[AXIS_INDEX[axis]])

    def rotate(self, matrix: np.ndarray, half: float) -> None:
        """Apply a rigid rotation to position and basis, then snap both."""
        self.grid_position = snap_coordinates(matrix @ self.grid_position, half)
        self.orientation = snap_basis(matrix @ self.orientation)

    def reset(self) -> None:
        self.grid_position = np.array(self.initial_grid_position)
        self.orientation = np.array(self.initial_orientation)

    def is_home(self) -> bool:
        """True when live position and basis exactly match the initial ones."""
        return (np.array_equal(self.grid_position, self.initial_grid_position)
                and np.array_equal(self.orientation, self.initial_orientation))

    def stickers(self, half: float) -> List[str]:
        """Face letters this piece carried on the outside of a solved cube."""
        faces = []
        for letter, (axis, side) in FACE_AXES.items():
            if self.initial_grid_position[AXIS_INDEX[axis]] == side * half:
                faces.append(letter)
        return faces

    def world_matrix(self, spacing: float = 1.0) -> np.ndarray:
        """4x4 pose of the piece: orientation basis plus scaled grid translation."""
        pose = np.eye(4)
        pose[:3, :3] = self.orientation
        pose[:3, 3] = self.grid_position * spacing
        return pose
