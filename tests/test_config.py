import numpy as np
import pytest

from rubik_cube.config import DEFAULT_SIZE, MAX_SIZE, MIN_SIZE, sanitize_numeric_input, sanitize_size


@pytest.mark.parametrize("value,expected", [
    (5, 1),
    (-3, -1),
    (0.25, 0.25),
    (np.int64(-1), -1),
    (np.float32(0.5), 0.5),
])
def test_numbers_are_clamped(value, expected):
    assert sanitize_numeric_input(value, -1, 1, 0) == expected


@pytest.mark.parametrize("value", [None, True, "1", float('nan'), float('inf'), np.float64('nan'), 1j])
def test_non_numbers_give_the_default(value):
    assert sanitize_numeric_input(value, -1, 1, 0) == 0


def test_sanitize_size():
    assert sanitize_size(np.int64(5)) == 5
    assert sanitize_size(3.6) == 4
    assert sanitize_size(100) == MAX_SIZE
    assert sanitize_size(0) == MIN_SIZE
    assert sanitize_size(float('nan')) == DEFAULT_SIZE
    assert type(sanitize_size(np.int32(4))) is int
