import numpy as np
import pytest

from rubik_cube.config import PIECE_SIZE, PIECE_SPACING
from rubik_cube.cube import CubeState
from rubik_cube.gesture import GestureResolver
from rubik_cube.picking import intersect_box, pick


def test_ray_hits_front_centre(cube3):
    hit = pick(cube3, (0, 0, 10), (0, 0, -1))
    assert hit.piece.grid_position.tolist() == [0.0, 0.0, 1.0]
    assert hit.normal.tolist() == [0.0, 0.0, 1.0]
    assert hit.point[2] == pytest.approx(PIECE_SPACING + PIECE_SIZE / 2)


def test_ray_hits_nearest_piece_from_above(cube3):
    hit = pick(cube3, (PIECE_SPACING, 10, -PIECE_SPACING), (0, -1, 0))
    assert hit.piece.grid_position.tolist() == [1.0, 1.0, -1.0]
    assert hit.normal.tolist() == [0.0, 1.0, 0.0]


def test_even_cube_pick():
    cube = CubeState(4)
    offset = 0.5 * PIECE_SPACING
    hit = pick(cube, (offset, offset, 10), (0, 0, -1))
    assert hit.piece.grid_position.tolist() == [0.5, 0.5, 1.5]


def test_miss(cube3):
    assert pick(cube3, (10, 10, 10), (0, 0, -1)) is None
    assert pick(cube3, (0, 0, 10), (0, 0, 1)) is None


def test_ray_starting_inside_box_is_ignored():
    assert intersect_box(np.zeros(3), np.array((0.0, 0.0, 1.0)), np.zeros(3), 0.5) is None


def test_picked_hit_feeds_the_resolver(cube3, front_camera):
    hit = pick(cube3, (PIECE_SPACING, PIECE_SPACING, 10), (0, 0, -1))
    move = GestureResolver(cube3).resolve(hit, (0.0, -30.0), front_camera.project)
    assert move.notation == "R"
