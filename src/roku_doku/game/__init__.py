"""Game module for Roku Doku.

Exports the simulation core:
- Brick, BrickLibrary: polyomino pieces, rotation and the playable catalogue
- Board: immutable 9x9 board with placement checks
- resolve: clearing of full rows, columns and 3x3 blocks
- ScoringRules: points per move
- GameState, Move, BlockPuzzleGame: state transitions and the game session
"""

from .board import Board, Position, can_place, legal_positions, newly_filled_count, place
from .bricks import BASE_SHAPES, BOARD_SIZE, Brick, BrickLibrary, BrickShape, all_rotations, normalize_brick, rotate_clockwise
from .core import (
    BlockPuzzleGame,
    GameConfig,
    GameState,
    Move,
    MoveOutcome,
    apply_move,
    has_legal_move,
    is_legal_move,
    perform_move,
    possible_moves,
    refill,
)
from .errors import ContractViolation
from .resolve import ResolveResult, full_units, resolve, resolve_bits
from .rules import ScoringRules

__all__ = [
    "BASE_SHAPES",
    "BOARD_SIZE",
    "Board",
    "Position",
    "can_place",
    "legal_positions",
    "newly_filled_count",
    "place",
    "Brick",
    "BrickLibrary",
    "BrickShape",
    "all_rotations",
    "normalize_brick",
    "rotate_clockwise",
    "BlockPuzzleGame",
    "GameConfig",
    "GameState",
    "Move",
    "MoveOutcome",
    "apply_move",
    "has_legal_move",
    "is_legal_move",
    "perform_move",
    "possible_moves",
    "refill",
    "ContractViolation",
    "ResolveResult",
    "full_units",
    "resolve",
    "resolve_bits",
    "ScoringRules",
]
