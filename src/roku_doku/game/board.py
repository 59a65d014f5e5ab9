from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Tuple

import numpy as np

from .bricks import BOARD_SIZE, Brick
from .errors import ContractViolation, require


class Position(NamedTuple):
    x: int
    y: int


def _bit(x: int, y: int) -> int:
    return 1 << (y * BOARD_SIZE + x)


@dataclass(frozen=True)
class Board:
    """Immutable 9x9 board of filled flags.

    Cells are packed into one integer, bit ``y * 9 + x`` set when cell (x, y) is
    filled. Boards are values: placing or clearing returns a new board, so states
    explored by the planner never share mutable cells.
    """

    bits: int = 0

    @classmethod
    def empty(cls) -> "Board":
        return cls(0)

    @classmethod
    def from_cells(cls, cells: Iterable[Tuple[int, int]]) -> "Board":
        bits = 0
        for x, y in cells:
            require(0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE, f"cell {(x, y)} is off the board")
            bits |= _bit(x, y)
        return cls(bits)

    @classmethod
    def from_array(cls, grid: np.ndarray) -> "Board":
        """Create a board from a (9, 9) array indexed ``[y, x]``; non-zero is filled."""
        require(grid.shape == (BOARD_SIZE, BOARD_SIZE), f"expected a 9x9 grid, got {grid.shape}")
        ys, xs = np.nonzero(grid)
        return cls.from_cells(zip(xs.tolist(), ys.tolist()))

    def is_filled(self, x: int, y: int) -> bool:
        return bool(self.bits & _bit(x, y))

    def filled_count(self) -> int:
        return self.bits.bit_count()

    def filled_cells(self) -> List[Tuple[int, int]]:
        return [(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE) if self.bits & _bit(x, y)]

    def to_array(self) -> np.ndarray:
        grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.bool_)
        for x, y in self.filled_cells():
            grid[y, x] = True
        return grid

    def get_filled_ratio(self) -> float:
        return self.filled_count() / float(BOARD_SIZE * BOARD_SIZE)


def can_place(board: Board, brick: Brick, pos: Tuple[int, int]) -> bool:
    """True when every cell of ``brick`` anchored at ``pos`` is on the board and empty."""
    x, y = pos
    if x < 0 or y < 0:
        raise ContractViolation(f"negative position {(x, y)}")
    if not brick.is_normalized:
        raise ContractViolation(f"brick {sorted(brick.offsets)} is not normalized")
    if x + brick.max_x > BOARD_SIZE - 1 or y + brick.max_y > BOARD_SIZE - 1:
        return False
    return board.bits & (brick.mask << (y * BOARD_SIZE + x)) == 0


def place(board: Board, brick: Brick, pos: Tuple[int, int]) -> Board:
    """Return a new board with ``brick`` filled in at ``pos``.

    Assumes position is already validated; an illegal placement is a caller bug.
    """
    if not can_place(board, brick, pos):
        raise ContractViolation(f"cannot place brick {sorted(brick.offsets)} at {tuple(pos)}")
    x, y = pos
    return Board(board.bits | (brick.mask << (y * BOARD_SIZE + x)))


def legal_positions(board: Board, brick: Brick) -> List[Position]:
    """All positions where ``brick`` fits, x-major then y."""
    if not brick.is_normalized:
        raise ContractViolation(f"brick {sorted(brick.offsets)} is not normalized")
    bits = board.bits
    mask = brick.mask
    positions: List[Position] = []
    for x in range(BOARD_SIZE - brick.max_x):
        for y in range(BOARD_SIZE - brick.max_y):
            if bits & (mask << (y * BOARD_SIZE + x)) == 0:
                positions.append(Position(x, y))
    return positions


def newly_filled_count(new_board: Board, old_board: Board) -> int:
    """Cells filled in ``new_board`` that were empty in ``old_board``."""
    return (new_board.bits & ~old_board.bits).bit_count()
