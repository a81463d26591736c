"""
Moves and the move executor.

The executor owns a FIFO queue and at most one active (animating) move. A move
is animated by elapsed-time ticks from the render loop and is committed to the
cube state exactly once when its duration has elapsed.
"""
from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List, Optional

from .config import AXES, ROTATION_MS, sanitize_numeric_input
from .cube import CubeState
from .notation import notation as render_notation
from .piece import Piece

logger = logging.getLogger(__name__)

QUARTER_TURN = math.pi / 2


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def layer_sign(layer: float) -> int:
    """Sign used by the angle convention; the middle layer counts as positive."""
    return -1 if layer < 0 else 1


def compute_angle(layer: float, direction: int) -> float:
    # Negative layers (L, D, B) turn the opposite way for the same direction value
    return -direction * layer_sign(layer) * QUARTER_TURN


def direction_from_angle_sign(angle_sign: int, layer: float) -> int:
    """Inverse of compute_angle: which direction yields a rotation of the given sign."""
    return -1 if angle_sign * layer_sign(layer) > 0 else 1


@dataclass
class Move:
    axis: str
    layer: float
    direction: int = 1
    angle: float = 0.0
    duration_ms: Optional[float] = None     # None: the executor's rotation speed
    notation: str = ''
    record: bool = True
    on_complete: Optional[Callable[['Move'], None]] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class HistoryEntry:
    axis: str
    layer: float
    direction: int
    notation: str


@dataclass
class ActiveMove:
    move: Move
    pieces: List[Piece]
    elapsed_ms: float = 0.0

    @property
    def progress(self) -> float:
        if self.move.duration_ms <= 0:
            return 1.0
        return min(self.elapsed_ms / self.move.duration_ms, 1.0)

    @property
    def current_angle(self) -> float:
        """Eased rotation (radians) the renderer should show for the active layer."""
        return self.move.angle * ease_out_cubic(self.progress)


class MoveExecutor:
    def __init__(self, cube: CubeState, rotation_ms: float = ROTATION_MS,
                 on_finalized: Optional[Callable[[Move], None]] = None) -> None:
        self.cube = cube
        self.rotation_ms = sanitize_numeric_input(rotation_ms, 0, 60000, ROTATION_MS)
        self.on_finalized = on_finalized
        self.queue: Deque[Move] = deque()
        self.active: Optional[ActiveMove] = None

    def normalize(self, axis: str, layer: float, direction: int = 1, duration_ms: Optional[float] = None,
                  notation: Optional[str] = None, record: bool = True,
                  on_complete: Optional[Callable[[Move], None]] = None) -> Optional[Move]:
        """Build a valid Move for the current cube, or None if it names no layer."""
        if axis not in AXES:
            return None
        snapped = self.cube.valid_layer(layer)
        if snapped is None:
            return None
        direction = -1 if sanitize_numeric_input(direction, -1, 1, 1) < 0 else 1
        if duration_ms is None:
            duration_ms = self.rotation_ms
        duration_ms = sanitize_numeric_input(duration_ms, 0, 60000, self.rotation_ms)
        if not notation:
            notation = render_notation(axis, snapped, direction, self.cube.size)
        return Move(axis, snapped, direction, compute_angle(snapped, direction),
                    duration_ms, notation, bool(record), on_complete)

    def submit(self, move: Move) -> Optional[Move]:
        """Queue a move; returns the normalised move, or None when it was dropped as invalid."""
        normalized = self.normalize(move.axis, move.layer, move.direction, move.duration_ms,
                                    move.notation, move.record, move.on_complete)
        if normalized is None:
            logger.debug("ignoring invalid move axis=%r layer=%r for size %d",
                         move.axis, move.layer, self.cube.size)
            return None
        self.queue.append(normalized)
        if self.active is None:
            self.start_next()
        return normalized

    def start_next(self) -> Optional[ActiveMove]:
        if self.active is not None:
            return self.active
        if not self.queue:
            return None
        move = self.queue.popleft()
        self.active = ActiveMove(move, self.cube.pieces_in_layer(move.axis, move.layer))
        return self.active

    def update(self, dt_ms: float) -> None:
        """Advance the animation by dt_ms; commits every move whose duration has elapsed."""
        remaining = sanitize_numeric_input(dt_ms, 0, math.inf, 0)
        self.start_next()
        while self.active is not None:
            needed = self.active.move.duration_ms - self.active.elapsed_ms
            if remaining < needed:
                self.active.elapsed_ms += remaining
                return
            remaining -= max(needed, 0)
            self._finalize()
            self.start_next()

    def flush(self) -> None:
        """Commit the active move and everything queued without animating."""
        self.start_next()
        while self.active is not None:
            self._finalize()
            self.start_next()

    def clear_queue(self) -> int:
        """Drop queued moves that have not started; the active move is untouched."""
        dropped = len(self.queue)
        self.queue.clear()
        return dropped

    def _finalize(self) -> None:
        active = self.active
        move = active.move
        self.cube.rotate_pieces(active.pieces, move.axis, move.angle)
        self.active = None

        for callback in (self.on_finalized, move.on_complete):
            if callback is None:
                continue
            try:
                callback(move)
            except Exception:
                logger.exception("move callback failed after %s", move.notation)

    def is_animating(self) -> bool:
        return self.active is not None

    def is_idle(self) -> bool:
        return self.active is None and not self.queue

    @property
    def pending(self) -> int:
        return len(self.queue)
