"""
CubeEngine: the object a front-end talks to.

It owns one cube state, its move executor, the gesture resolver, the move
history and the solve timer. Instances share nothing, so several engines can
live side by side.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_SIZE, ROTATION_MS, SCRAMBLE_ROTATION_MS, sanitize_numeric_input, sanitize_size
from .cube import CubeState
from .gesture import GestureResolver, Hit, Projector, ResolverMode
from .moves import ActiveMove, HistoryEntry, Move, MoveExecutor
from .notation import inverse_notation, parse_notation
from .scramble import generate_scramble

logger = logging.getLogger(__name__)


class CubeEngine:
    def __init__(self, size: int = DEFAULT_SIZE, rotation_ms: float = ROTATION_MS,
                 scramble_rotation_ms: float = SCRAMBLE_ROTATION_MS,
                 resolver_mode: ResolverMode = ResolverMode.OWN_LAYER,
                 on_move_recorded: Optional[Callable[[str, int], None]] = None,
                 on_solved: Optional[Callable[[], None]] = None,
                 on_move_applied: Optional[Callable[[Move], None]] = None) -> None:
        self.cube = CubeState(size)
        self.executor = MoveExecutor(self.cube, rotation_ms, on_finalized=self._on_finalized)
        self.resolver = GestureResolver(self.cube, resolver_mode)
        self.scramble_rotation_ms = sanitize_numeric_input(scramble_rotation_ms, 0, 60000, SCRAMBLE_ROTATION_MS)

        self.on_move_recorded = on_move_recorded
        self.on_solved = on_solved
        self.on_move_applied = on_move_applied

        self.history: List[HistoryEntry] = []
        self.move_count = 0
        # Solve timer: starts on the first recorded move, stops when solved
        self.elapsed_ms = 0.0
        self.game_in_progress = False

    @property
    def size(self) -> int:
        return self.cube.size

    @property
    def active(self) -> Optional[ActiveMove]:
        return self.executor.active

    # -------- Queries --------
    def is_animating(self) -> bool:
        return self.executor.is_animating()

    def is_busy(self) -> bool:
        """True while a move is animating or waiting in the queue."""
        return not self.executor.is_idle()

    def is_solved(self) -> bool:
        return self.cube.is_solved()

    # -------- Moves --------
    def submit(self, move: Move) -> Optional[Move]:
        return self.executor.submit(move)

    def submit_move(self, axis: str, layer: float, direction: int = 1, *, duration_ms: Optional[float] = None,
                    record: bool = True, notation: Optional[str] = None,
                    on_complete: Optional[Callable[[Move], None]] = None) -> Optional[Move]:
        """Queue a layer turn; returns None (no-op) when axis/layer do not exist for this size."""
        move = self.executor.normalize(axis, layer, direction, duration_ms, notation, record, on_complete)
        if move is None:
            logger.debug("rejected move axis=%r layer=%r on %dx%d", axis, layer, self.size, self.size)
            return None
        return self.executor.submit(move)

    def submit_notation(self, text: str, **kwargs) -> Optional[Move]:
        parsed = parse_notation(text, self.size)
        if parsed is None:
            logger.debug("unknown notation %r for size %d", text, self.size)
            return None
        axis, layer, direction = parsed
        return self.submit_move(axis, layer, direction, **kwargs)

    def resolve_drag(self, hit: Hit, drag: Sequence[float], project: Projector,
                     view_direction: Optional[Sequence[float]] = None) -> Optional[Move]:
        return self.resolver.resolve(hit, drag, project, view_direction)

    def submit_drag(self, hit: Hit, drag: Sequence[float], project: Projector,
                    view_direction: Optional[Sequence[float]] = None) -> Optional[Move]:
        """Resolve a drag and queue the resulting move; None means treat it as a camera drag."""
        move = self.resolve_drag(hit, drag, project, view_direction)
        if move is None:
            return None
        return self.executor.submit(move)

    def update(self, dt_ms: float) -> None:
        """Per-frame tick from the render loop."""
        dt_ms = sanitize_numeric_input(dt_ms, 0, 60000, 0)
        if self.game_in_progress:
            self.elapsed_ms += dt_ms
        self.executor.update(dt_ms)

    def flush(self) -> None:
        self.executor.flush()

    def clear_queue(self) -> int:
        return self.executor.clear_queue()

    # -------- Structural operations --------
    def _refuse_if_busy(self, action: str) -> bool:
        if self.is_busy():
            logger.info("%s refused: a turn is still in progress", action)
            return True
        return False

    def _clear_progress(self) -> None:
        self.history.clear()
        self.move_count = 0
        self.elapsed_ms = 0.0
        self.game_in_progress = False

    def reset(self) -> bool:
        if self._refuse_if_busy("reset"):
            return False
        self.cube.reset()
        self._clear_progress()
        return True

    def resize(self, new_size: int) -> bool:
        if self._refuse_if_busy("resize"):
            return False
        self.cube.build(sanitize_size(new_size))
        self._clear_progress()
        return True

    def scramble(self, rng: Optional[random.Random] = None) -> bool:
        """Queue a scramble; scramble turns are never recorded or counted."""
        if self._refuse_if_busy("scramble"):
            return False
        self._clear_progress()
        for move in generate_scramble(self.size, rng):
            self.submit_move(move.axis, move.layer, move.direction,
                             duration_ms=self.scramble_rotation_ms, record=False)
        return True

    def undo(self) -> bool:
        """Turn back the last recorded move (the hint button)."""
        if self._refuse_if_busy("undo"):
            return False
        if not self.history:
            return False
        last = self.history.pop()
        self.move_count = max(0, self.move_count - 1)
        self.submit_move(last.axis, last.layer, -last.direction, record=False,
                         notation=inverse_notation(last.notation, self.size))
        return True

    # -------- Executor callback --------
    def _notify(self, callback: Optional[Callable], *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("engine callback %r failed", callback)

    def _on_finalized(self, move: Move) -> None:
        self._notify(self.on_move_applied, move)
        if not move.record:
            return
        self.history.append(HistoryEntry(move.axis, move.layer, move.direction, move.notation))
        self.move_count += 1
        if not self.game_in_progress and self.move_count == 1:
            self.game_in_progress = True
            self.elapsed_ms = 0.0
        self._notify(self.on_move_recorded, move.notation, self.move_count)
        if self.cube.is_solved():
            self.game_in_progress = False
            self._notify(self.on_solved)
