"""Logical core of an N x N x N twisty puzzle: cube state, move queue and drag-to-turn."""
from .cube import CubeState
from .engine import CubeEngine
from .gesture import GestureResolver, Hit, ResolverMode
from .moves import HistoryEntry, Move, MoveExecutor
from .notation import inverse_notation, notation, parse_notation
from .piece import Piece
from .scramble import generate_scramble

__all__ = [
    'CubeEngine',
    'CubeState',
    'GestureResolver',
    'HistoryEntry',
    'Hit',
    'Move',
    'MoveExecutor',
    'Piece',
    'ResolverMode',
    'generate_scramble',
    'inverse_notation',
    'notation',
    'parse_notation',
]
