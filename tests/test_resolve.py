from __future__ import annotations

from roku_doku.game import Board, full_units, resolve, resolve_bits


def test_resolve_empty_board():
    result = resolve(Board.empty())
    assert result.units_cleared == 0
    assert result.board.filled_count() == 0


def test_resolve_row():
    board = Board.from_cells((x, 4) for x in range(9))
    result = resolve(board)
    assert result.units_cleared == 1
    assert result.board.filled_count() == 0


def test_resolve_two_rows():
    board = Board.from_cells([(x, 4) for x in range(9)] + [(x, 7) for x in range(9)])
    result = resolve(board)
    assert result.units_cleared == 2
    assert result.board.filled_count() == 0


def test_resolve_column():
    board = Board.from_cells((3, y) for y in range(9))
    result = resolve(board)
    assert result.units_cleared == 1
    assert result.board.filled_count() == 0


def test_resolve_two_columns():
    board = Board.from_cells([(3, y) for y in range(9)] + [(5, y) for y in range(9)])
    result = resolve(board)
    assert result.units_cleared == 2
    assert result.board.filled_count() == 0


def test_resolve_block():
    board = Board.from_cells((x, y) for x in range(3, 6) for y in range(3, 6))
    result = resolve(board)
    assert result.units_cleared == 1
    assert result.board.filled_count() == 0


def test_resolve_column_row_and_block():
    cells = [(x, y) for x in range(3, 6) for y in range(3, 6)]
    cells += [(x, 2) for x in range(9)]
    cells += [(1, y) for y in range(9)]
    board = Board.from_cells(cells)
    assert sorted(full_units(board)) == [("block", 4), ("column", 1), ("row", 2)]
    result = resolve(board)
    assert result.units_cleared == 3
    assert result.board.filled_count() == 0


def test_crossing_units_are_judged_on_the_same_board():
    # Row 0 and column 0 share (0, 0); both count even though the cell is cleared once.
    board = Board.from_cells([(x, 0) for x in range(9)] + [(0, y) for y in range(9)] + [(5, 5)])
    result = resolve(board)
    assert result.units_cleared == 2
    assert result.board.filled_cells() == [(5, 5)]


def test_partial_units_are_kept():
    board = Board.from_cells([(x, 0) for x in range(8)] + [(4, 4)])
    result = resolve(board)
    assert result.units_cleared == 0
    assert result.board == board


def test_block_overlapping_cleared_row_is_still_cleared():
    # Block 0 is full and row 1 is full; clearing row 1 first must not un-full the block.
    cells = [(x, y) for x in range(3) for y in range(3)] + [(x, 1) for x in range(9)]
    result = resolve(Board.from_cells(cells))
    assert result.units_cleared == 2
    assert result.board.filled_count() == 0


def test_resolve_bits_matches_resolve():
    cells = [(x, 4) for x in range(9)] + [(4, y) for y in range(9)] + [(0, 0), (8, 8)]
    board = Board.from_cells(cells)
    bits, units = resolve_bits(board.bits)
    assert units == 2
    assert Board(bits) == resolve(board).board
    assert Board(bits).filled_cells() == [(0, 0), (8, 8)]
    assert resolve_bits(0) == (0, 0)
