import numpy as np
import pytest

from rubik_cube.config import PIECE_SIZE, PIECE_SPACING
from rubik_cube.cube import CubeState
from rubik_cube.engine import CubeEngine
from rubik_cube.gesture import Hit


class OrthoCamera:
    """Orthographic camera looking at the origin from direction `eye`, 50px per world unit."""

    def __init__(self, eye, scale=50.0, center=(400.0, 300.0)):
        forward = -np.asarray(eye, dtype=float)
        forward /= np.linalg.norm(forward)
        right = np.cross(forward, (0.0, 1.0, 0.0))
        right /= np.linalg.norm(right)
        self.right = right
        self.up = np.cross(right, forward)
        self.scale = scale
        self.center = center
        self.view_direction = -forward

    def project(self, point):
        point = np.asarray(point, dtype=float)
        return (self.center[0] + self.scale * float(point @ self.right),
                self.center[1] - self.scale * float(point @ self.up))


@pytest.fixture
def front_camera():
    return OrthoCamera((0.0, 0.0, 1.0))


@pytest.fixture
def iso_camera():
    return OrthoCamera((1.0, 1.0, 1.0))


@pytest.fixture
def cube3():
    return CubeState(3)


@pytest.fixture
def engine():
    return CubeEngine(3, rotation_ms=100)


@pytest.fixture
def make_hit():
    """Hit on the outward face `normal` of the piece at grid `position`."""

    def _make(cube, position, normal):
        piece = cube.piece_at(position)
        assert piece is not None
        normal = np.asarray(normal, dtype=float)
        point = piece.grid_position * PIECE_SPACING + normal * (PIECE_SIZE / 2.0)
        return Hit(piece, point, normal)

    return _make


def snapshot(cube):
    return [(p.grid_position.copy(), p.orientation.copy()) for p in cube.pieces]


def same_state(cube, snap):
    return all(np.array_equal(p.grid_position, pos) and np.array_equal(p.orientation, ori)
               for p, (pos, ori) in zip(cube.pieces, snap))
