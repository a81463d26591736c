"""
Scramble generation.
"""
from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .config import AXES, MIN_SCRAMBLE_LENGTH, SCRAMBLE_MOVES_PER_SIZE, sanitize_size
from .moves import Move


def scramble_length(size: int) -> int:
    return max(MIN_SCRAMBLE_LENGTH, SCRAMBLE_MOVES_PER_SIZE * sanitize_size(size))


def layer_options(size: int) -> List[Tuple[str, float]]:
    """Every (axis, layer) pair of a cube of this size."""
    size = sanitize_size(size)
    half = (size - 1) / 2.0
    return [(axis, -half + i) for axis in AXES for i in range(size)]


def generate_scramble(size: int, rng: Optional[random.Random] = None, length: Optional[int] = None) -> List[Move]:
    """Random unrecorded moves; no move repeats the previous move's (axis, layer)."""
    rng = rng or random.Random()
    options = layer_options(size)
    n = scramble_length(size) if length is None else max(0, int(length))
    seq: List[Move] = []
    last: Optional[Tuple[str, float]] = None
    for _ in range(n):
        choice = rng.choice(options)
        while choice == last:
            choice = rng.choice(options)
        direction = 1 if rng.getrandbits(1) else -1
        seq.append(Move(choice[0], choice[1], direction, record=False))
        last = choice
    return seq
