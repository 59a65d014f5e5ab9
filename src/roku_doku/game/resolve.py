from __future__ import annotations

from typing import List, NamedTuple, Tuple

from .board import Board
from .bricks import BOARD_SIZE


class ResolveResult(NamedTuple):
    board: Board
    units_cleared: int


def _unit_mask(cells) -> int:
    mask = 0
    for x, y in cells:
        mask |= 1 << (y * BOARD_SIZE + x)
    return mask


ROW_MASKS: Tuple[int, ...] = tuple(_unit_mask((x, y) for x in range(BOARD_SIZE)) for y in range(BOARD_SIZE))
COLUMN_MASKS: Tuple[int, ...] = tuple(_unit_mask((x, y) for y in range(BOARD_SIZE)) for x in range(BOARD_SIZE))
# Blocks are numbered row-major: block 4 is the centre one spanning cells 3..5 on both axes.
BLOCK_MASKS: Tuple[int, ...] = tuple(
    _unit_mask((bx * 3 + x, by * 3 + y) for x in range(3) for y in range(3))
    for by in range(3)
    for bx in range(3)
)
UNIT_MASKS: Tuple[int, ...] = ROW_MASKS + COLUMN_MASKS + BLOCK_MASKS


def resolve_bits(bits: int) -> Tuple[int, int]:
    """Raw-bits form of ``resolve``: returns ``(bits_after, units_cleared)``."""
    cleared = 0
    units = 0
    for mask in UNIT_MASKS:
        if bits & mask == mask:
            cleared |= mask
            units += 1
    return bits & ~cleared, units


def resolve(board: Board) -> ResolveResult:
    """Clear every full row, column and 3x3 block.

    Fullness is judged for all 27 units on the incoming board before anything is
    cleared, so overlapping units are cleared together and nothing cascades.
    """
    bits, units = resolve_bits(board.bits)
    if units == 0:
        return ResolveResult(board, 0)
    return ResolveResult(Board(bits), units)


def full_units(board: Board) -> List[Tuple[str, int]]:
    """``(kind, index)`` of each full unit, kind being "row", "column" or "block"."""
    units: List[Tuple[str, int]] = []
    for kind, masks in (("row", ROW_MASKS), ("column", COLUMN_MASKS), ("block", BLOCK_MASKS)):
        for index, mask in enumerate(masks):
            if board.bits & mask == mask:
                units.append((kind, index))
    return units
