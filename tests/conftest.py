from __future__ import annotations

import pytest

from roku_doku.game import Board, Brick, BrickLibrary

# One empty cell per row, column and 3x3 block; no two of them touch.
TRANSVERSAL = [(0, 0), (3, 1), (6, 2), (1, 3), (4, 4), (7, 5), (2, 6), (5, 7), (8, 8)]


@pytest.fixture
def single() -> Brick:
    return Brick.of((0, 0))


@pytest.fixture
def domino() -> Brick:
    return Brick.of((0, 0), (1, 0))


@pytest.fixture
def full_brick() -> Brick:
    return Brick(frozenset((x, y) for x in range(9) for y in range(9)))


@pytest.fixture
def library() -> BrickLibrary:
    return BrickLibrary.standard()


@pytest.fixture
def transversal_board() -> Board:
    return Board.from_cells((x, y) for x in range(9) for y in range(9) if (x, y) not in TRANSVERSAL)


@pytest.fixture
def almost_full_row() -> Board:
    return Board.from_cells((x, 0) for x in range(8))
