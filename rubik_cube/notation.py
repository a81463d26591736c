"""
Move notation.

Outer layers use the face letters R/L/U/D/F/B, the middle layers of odd cubes
use M/E/S, and any other inner layer falls back to the axis letter followed by
the 1-based layer index counted from the negative side (``x2`` on a 4x4).
A trailing ``'`` marks direction -1.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

from .config import LAYER_TOLERANCE
from .piece import FACE_AXES

# axis -> (positive face, negative face, middle slice)
AXIS_LETTERS = {
    'x': ('R', 'L', 'M'),
    'y': ('U', 'D', 'E'),
    'z': ('F', 'B', 'S'),
}
SLICE_AXES = {'M': 'x', 'E': 'y', 'S': 'z'}
PRIME = "'"

_INNER_RE = re.compile(r"^([xyz])(\d+)$")


def _half(size: int) -> float:
    return (size - 1) / 2.0


def notation(axis: str, layer: float, direction: int, size: int) -> str:
    """Render (axis, layer, direction) as text for a cube of the given size."""
    half = _half(size)
    positive, negative, middle = AXIS_LETTERS[axis]
    if abs(layer - half) <= LAYER_TOLERANCE:
        text = positive
    elif abs(layer + half) <= LAYER_TOLERANCE:
        text = negative
    elif size % 2 == 1 and abs(layer) <= LAYER_TOLERANCE:
        text = middle
    else:
        text = f"{axis}{int(round(layer + half)) + 1}"
    return text + (PRIME if direction < 0 else "")


def face_move(face: str, size: int) -> Optional[Tuple[str, float]]:
    """Axis and outer layer for a face letter, e.g. 'R' -> ('x', half)."""
    if face not in FACE_AXES:
        return None
    axis, side = FACE_AXES[face]
    return axis, side * _half(size)


def parse_notation(text: str, size: int) -> Optional[Tuple[str, float, int]]:
    """Inverse of notation(); returns None for text that names no layer of this size."""
    if not isinstance(text, str):
        return None
    text = text.strip()
    direction = 1
    if text.endswith(PRIME):
        direction = -1
        text = text[:-1]
    if not text:
        return None

    outer = face_move(text, size)
    if outer is not None:
        return outer[0], outer[1], direction
    if text in SLICE_AXES:
        if size % 2 == 0:
            return None
        return SLICE_AXES[text], 0.0, direction
    match = _INNER_RE.match(text)
    if match:
        index = int(match.group(2))
        if 1 <= index <= size:
            return match.group(1), index - 1 - _half(size), direction
    return None


def inverse_notation(text: str, size: int) -> str:
    parsed = parse_notation(text, size)
    if parsed is None:
        return text[:-1] if text.endswith(PRIME) else text + PRIME
    axis, layer, direction = parsed
    return notation(axis, layer, -direction, size)
