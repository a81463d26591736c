import math

import numpy as np
import pytest

from rubik_cube.cube import CubeState
from rubik_cube.moves import (Move, MoveExecutor, compute_angle, direction_from_angle_sign, ease_out_cubic)


@pytest.fixture
def executor(cube3):
    return MoveExecutor(cube3, rotation_ms=100)


def test_angle_convention():
    assert compute_angle(1, 1) == -math.pi / 2
    assert compute_angle(-1, 1) == math.pi / 2
    assert compute_angle(1.5, -1) == math.pi / 2
    # middle layer keeps the positive-layer sense
    assert compute_angle(0, 1) == -math.pi / 2


@pytest.mark.parametrize("layer", [-1.5, -1, 0, 0.5, 1])
@pytest.mark.parametrize("direction", [1, -1])
def test_direction_from_angle_sign_inverts_compute_angle(layer, direction):
    sign = 1 if compute_angle(layer, direction) > 0 else -1
    assert direction_from_angle_sign(sign, layer) == direction


def test_ease_out_cubic_endpoints():
    assert ease_out_cubic(0) == 0
    assert ease_out_cubic(1) == 1
    assert ease_out_cubic(0.5) == 0.875


def test_submit_does_not_apply_until_ticked(executor, cube3):
    move = executor.submit(Move('x', 1, 1))
    assert move is not None
    assert executor.is_animating()
    assert cube3.is_solved()

    executor.update(50)
    assert executor.active.progress == 0.5
    assert executor.active.current_angle == pytest.approx(move.angle * 0.875)
    assert cube3.is_solved()

    executor.update(50)
    assert not executor.is_animating()
    assert executor.is_idle()
    assert not cube3.is_solved()


def test_zero_duration_move_still_waits_for_tick(executor, cube3):
    executor.submit(Move('y', 1, 1, duration_ms=0))
    assert cube3.is_solved()
    executor.update(0)
    assert not cube3.is_solved()


def test_moves_finish_in_fifo_order(executor):
    done = []
    for notation in ("R", "U", "F'"):
        executor.submit(Move(*{'R': ('x', 1, 1), 'U': ('y', 1, 1), "F'": ('z', 1, -1)}[notation],
                             on_complete=lambda m: done.append(m.notation)))
    assert executor.pending == 2
    executor.update(1000)
    assert done == ["R", "U", "F'"]
    assert executor.is_idle()


def test_next_move_selects_layer_after_previous_finalised(executor, cube3):
    # R then U: the U layer must contain the piece R brought up from the front
    executor.submit(Move('x', 1, 1))
    executor.submit(Move('y', 1, 1))
    moved = cube3.piece_at((1, 0, 1))
    executor.update(100)
    assert moved in executor.active.pieces
    executor.update(100)
    assert executor.is_idle()


def test_clear_queue_keeps_active_move(executor, cube3):
    for _ in range(3):
        executor.submit(Move('z', -1, 1))
    assert executor.clear_queue() == 2
    assert executor.is_animating()
    executor.update(100)
    assert executor.is_idle()
    assert not cube3.is_solved()


@pytest.mark.parametrize("axis,layer", [('w', 1), ('x', 5), ('y', float('nan')), ('z', None), ('x', 0.5)])
def test_invalid_moves_are_no_ops(executor, cube3, axis, layer):
    assert executor.submit(Move(axis, layer, 1)) is None
    assert executor.is_idle()
    executor.update(1000)
    assert cube3.is_solved()


def test_even_cube_has_no_middle_layer():
    executor = MoveExecutor(CubeState(4))
    assert executor.submit(Move('x', 0, 1)) is None
    assert executor.submit(Move('x', 0.5, 1)) is not None


def test_normalisation(executor):
    move = executor.normalize('x', 0.9999, -7, duration_ms=float('inf'))
    assert move.layer == 1.0
    assert move.direction == -1
    assert move.duration_ms == 100
    assert move.notation == "R'"
    assert executor.normalize('x', 1, 0).direction == 1


def test_flush_applies_everything(executor, cube3):
    for direction in (1, 1, 1, 1):
        executor.submit(Move('x', 0, direction))
    executor.flush()
    assert executor.is_idle()
    assert cube3.is_solved()


def test_callback_failure_does_not_stall_queue(executor, cube3):
    def boom(move):
        raise RuntimeError("renderer went away")

    executor.submit(Move('x', 1, 1, on_complete=boom))
    executor.submit(Move('x', 1, -1))
    executor.update(500)
    assert executor.is_idle()
    assert cube3.is_solved()


def test_numpy_scalars_normalise_like_builtins(executor):
    move = executor.normalize('x', np.float64(1.0), np.int64(-1), duration_ms=np.float32(50))
    assert move.direction == -1
    assert move.notation == "R'"
    assert move.duration_ms == 50


def test_finalized_moves_match_immediate_application(executor, cube3):
    reference = CubeState(3)
    for axis, layer, direction in (('x', 1, 1), ('y', 0, -1), ('z', -1, 1), ('x', -1, -1)):
        executor.submit(Move(axis, layer, direction))
        reference.apply_move(axis, layer, compute_angle(layer, direction))
    executor.flush()
    assert not cube3.is_solved()
    for live, expected in zip(cube3.pieces, reference.pieces):
        assert np.array_equal(live.grid_position, expected.grid_position)
        assert np.array_equal(live.orientation, expected.orientation)
