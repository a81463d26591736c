"""
Gesture resolver: turns a pointer drag anchored on a piece face into a layer move.

The renderer supplies the hit (piece, world-space point and outward normal),
the drag vector in screen pixels measured from the pointer-down position, and
a ``project(point3d) -> (x, y)`` function for its current camera. The resolver
never touches the renderer otherwise.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .config import (AXES, DEGENERATE_PX, LAYER_TOLERANCE, MIN_DRAG_PX, PARALLEL_THRESHOLD,
                     SAMPLE_OFFSET, sanitize_numeric_input)
from .cube import CubeState
from .moves import QUARTER_TURN, Move, compute_angle, direction_from_angle_sign
from .notation import notation
from .piece import AXIS_INDEX, AXIS_VECTORS, Piece, rotation_matrix

logger = logging.getLogger(__name__)

Projector = Callable[[np.ndarray], Sequence[float]]


class ResolverMode(enum.Enum):
    OWN_LAYER = 'own-layer'
    ADJACENT_LAYER = 'adjacent-layer'


@dataclass
class Hit:
    piece: Piece
    point: np.ndarray
    normal: np.ndarray


def _unit(vector: np.ndarray) -> Optional[np.ndarray]:
    length = float(np.linalg.norm(vector))
    if not math.isfinite(length) or length < 1e-12:
        return None
    return vector / length


def dominant_axis(vector: np.ndarray) -> str:
    """Cube axis with the largest absolute component; ties resolve in x, y, z order."""
    magnitudes = np.abs(vector)
    for axis in AXES:
        if magnitudes[AXIS_INDEX[axis]] >= magnitudes.max():
            return axis
    return 'z'


def face_tangents(normal: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Two orthogonal unit directions lying in the plane of a face."""
    up = np.array((0.0, 1.0, 0.0))
    if abs(float(np.dot(up, normal))) > PARALLEL_THRESHOLD:
        up = np.array((1.0, 0.0, 0.0))
    tangent_a = _unit(np.cross(up, normal))
    tangent_b = _unit(np.cross(normal, tangent_a))
    return tangent_a, tangent_b


def _project(project: Projector, point: np.ndarray) -> Optional[np.ndarray]:
    screen = np.asarray(project(point), dtype=float).reshape(-1)[:2]
    if screen.shape != (2,) or not np.all(np.isfinite(screen)):
        return None
    return screen


def project_direction(project: Projector, origin: np.ndarray, direction: np.ndarray) -> Optional[np.ndarray]:
    """Screen-space image of a world direction anchored at origin."""
    start = _project(project, origin)
    end = _project(project, origin + direction)
    if start is None or end is None:
        return None
    return end - start


def _score(projected: Optional[np.ndarray], drag: np.ndarray, drag_length: float) -> float:
    if projected is None:
        return 0.0
    length = float(np.linalg.norm(projected))
    if length < DEGENERATE_PX:
        return 0.0
    return float(np.dot(projected, drag)) / (length * drag_length)


class GestureResolver:
    def __init__(self, cube: CubeState, mode: ResolverMode = ResolverMode.OWN_LAYER,
                 min_drag_px: float = MIN_DRAG_PX, sample_offset: float = SAMPLE_OFFSET,
                 view_direction: Sequence[float] = (0.0, 0.0, 1.0)) -> None:
        self.cube = cube
        self.mode = mode if isinstance(mode, ResolverMode) else ResolverMode.OWN_LAYER
        self.min_drag_px = sanitize_numeric_input(min_drag_px, 0, 1000, MIN_DRAG_PX)
        self.sample_offset = sanitize_numeric_input(sample_offset, 0.01, 10, SAMPLE_OFFSET)
        self.view_direction = np.asarray(view_direction, dtype=float)

    def resolve(self, hit: Hit, drag: Sequence[float], project: Projector,
                view_direction: Optional[Sequence[float]] = None) -> Optional[Move]:
        """Infer the intended move, or None if the drag is too short or undecidable."""
        drag = np.asarray(drag, dtype=float).reshape(-1)[:2]
        drag_length = float(np.linalg.norm(drag))
        if not math.isfinite(drag_length) or drag_length < self.min_drag_px or drag_length == 0:
            return None

        point = np.asarray(hit.point, dtype=float)
        normal = _unit(np.asarray(hit.normal, dtype=float))
        if normal is None:
            return None

        if self.mode is ResolverMode.ADJACENT_LAYER and self._faces_camera(hit.piece, normal, view_direction):
            return self._resolve_adjacent(hit.piece, point, normal, drag, drag_length, project)

        tangent_a, tangent_b = face_tangents(normal)
        score_a = _score(project_direction(project, point, tangent_a), drag, drag_length)
        score_b = _score(project_direction(project, point, tangent_b), drag, drag_length)
        if abs(score_a) >= abs(score_b):
            tangent, score = tangent_a, score_a
        else:
            tangent, score = tangent_b, score_b
        if score == 0:
            return None

        drag_tangent = tangent * math.copysign(1.0, score)
        rotation_axis = _unit(np.cross(normal, drag_tangent))
        if rotation_axis is None:
            return None
        axis = dominant_axis(rotation_axis)
        layer = self.cube.valid_layer(hit.piece.coordinate(axis))
        return self._finish(axis, layer, point, drag_tangent, drag, drag_length, project)

    def _faces_camera(self, piece: Piece, normal: np.ndarray, view_direction: Optional[Sequence[float]]) -> bool:
        view = self.view_direction if view_direction is None else np.asarray(view_direction, dtype=float)
        if _unit(view) is None:
            return False
        axis = dominant_axis(view)
        index = AXIS_INDEX[axis]
        side = math.copysign(1.0, view[index])
        if dominant_axis(normal) != axis or normal[index] * side <= 0:
            return False
        return abs(piece.coordinate(axis) - side * self.cube.half_extent) <= LAYER_TOLERANCE

    def _resolve_adjacent(self, piece: Piece, point: np.ndarray, normal: np.ndarray, drag: np.ndarray,
                          drag_length: float, project: Projector) -> Optional[Move]:
        """Camera-facing face: a drag along one in-face axis spins the nearest outer layer of the other."""
        face_axis = dominant_axis(normal)
        in_face = [axis for axis in AXES if axis != face_axis]
        scores = [_score(project_direction(project, point, AXIS_VECTORS[axis]), drag, drag_length)
                  for axis in in_face]
        if abs(scores[0]) >= abs(scores[1]):
            tangent_axis, axis, score = in_face[0], in_face[1], scores[0]
        else:
            tangent_axis, axis, score = in_face[1], in_face[0], scores[1]
        if score == 0:
            return None

        coordinate = piece.coordinate(axis)
        if abs(coordinate) <= LAYER_TOLERANCE:
            layer = self.cube.valid_layer(coordinate)
        else:
            layer = math.copysign(self.cube.half_extent, coordinate)
        drag_tangent = AXIS_VECTORS[tangent_axis] * math.copysign(1.0, score)
        return self._finish(axis, layer, point, drag_tangent, drag, drag_length, project)

    def _finish(self, axis: str, layer: Optional[float], point: np.ndarray, drag_tangent: np.ndarray,
                drag: np.ndarray, drag_length: float, project: Projector) -> Optional[Move]:
        if layer is None:
            return None
        sign = self._rotation_sign(axis, point, drag_tangent, drag / drag_length, project)
        if sign is None:
            logger.debug("gesture on %s layer %s has no usable screen projection", axis, layer)
            return None
        direction = direction_from_angle_sign(sign, layer)
        return Move(axis, layer, direction, compute_angle(layer, direction),
                    notation=notation(axis, layer, direction, self.cube.size))

    def _rotation_sign(self, axis: str, point: np.ndarray, drag_tangent: np.ndarray,
                       drag_unit: np.ndarray, project: Projector) -> Optional[int]:
        """Pick the rotation sign whose predicted screen motion best follows the drag."""
        sample = point + drag_tangent * self.sample_offset
        start = _project(project, sample)
        if start is None:
            return None
        best_sign = None
        best_score = -math.inf
        for sign in (1, -1):
            rotated = _project(project, rotation_matrix(axis, sign * QUARTER_TURN) @ sample)
            if rotated is None:
                continue
            predicted = rotated - start
            length = float(np.linalg.norm(predicted))
            if length < DEGENERATE_PX:
                continue
            score = float(np.dot(predicted / length, drag_unit))
            if score > best_score:
                best_score = score
                best_sign = sign
        return best_sign
