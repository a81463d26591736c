"""
Cube state: the N x N x N collection of pieces.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np

from .config import AXES, LAYER_TOLERANCE, sanitize_size
from .piece import AXIS_INDEX, Piece, rotation_matrix

logger = logging.getLogger(__name__)


class CubeState:
    def __init__(self, size: int = 3) -> None:
        self.pieces: List[Piece] = []
        self.size = 0
        self.half_extent = 0.0
        self.build(size)

    def build(self, size: int) -> None:
        """Enumerate every grid coordinate and create one piece per visible slot."""
        self.size = sanitize_size(size)
        self.half_extent = (self.size - 1) / 2.0
        self.pieces = []
        coords = self.layer_values()
        for x in coords:
            for y in coords:
                for z in coords:
                    # The hidden core of odd cubes is never visible
                    if x == 0 and y == 0 and z == 0:
                        continue
                    self.pieces.append(Piece(np.array((x, y, z))))
        logger.debug("built %dx%dx%d cube with %d pieces", self.size, self.size, self.size, len(self.pieces))

    def reset(self) -> None:
        for piece in self.pieces:
            piece.reset()

    def layer_values(self) -> List[float]:
        """The fixed coordinate set {-half, ..., +half} in steps of 1."""
        return [-self.half_extent + i for i in range(self.size)]

    def valid_layer(self, value: object) -> Optional[float]:
        """Snap value onto the coordinate set, or None if it names no layer of this cube."""
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            return None
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            return None
        for layer in self.layer_values():
            if abs(layer - value) <= LAYER_TOLERANCE:
                return layer
        return None

    def pieces_in_layer(self, axis: str, layer: float) -> List[Piece]:
        index = AXIS_INDEX[axis]
        return [p for p in self.pieces if abs(p.grid_position[index] - layer) <= LAYER_TOLERANCE]

    def apply_move(self, axis: str, layer: float, angle: float) -> List[Piece]:
        """Immediate (no animation) rotation of one layer; returns the pieces moved."""
        if axis not in AXES:
            return []
        layer_pieces = self.pieces_in_layer(axis, layer)
        self.rotate_pieces(layer_pieces, axis, angle)
        return layer_pieces

    def rotate_pieces(self, pieces: List[Piece], axis: str, angle: float) -> None:
        """Rotate the given pieces about a cube axis and snap them back onto the grid."""
        matrix = rotation_matrix(axis, angle)
        for piece in pieces:
            piece.rotate(matrix, self.half_extent)

    def is_solved(self) -> bool:
        return all(piece.is_home() for piece in self.pieces)

    def piece_at(self, position) -> Optional[Piece]:
        target = np.asarray(position, dtype=float)
        for piece in self.pieces:
            if np.allclose(piece.grid_position, target, atol=LAYER_TOLERANCE):
                return piece
        return None
