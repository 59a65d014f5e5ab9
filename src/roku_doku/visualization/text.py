from __future__ import annotations

from typing import Iterable, List, Sequence

from roku_doku.game.board import Board
from roku_doku.game.bricks import BOARD_SIZE, Brick, BrickLibrary
from roku_doku.game.core import GameState

COLUMN_LETTERS = "abcdefghi"
_HEADER = "  abc def ghi"
_RULE = " -------------"


def format_board(board: Board) -> str:
    lines = [_HEADER]
    for y in range(BOARD_SIZE):
        if y % 3 == 0:
            lines.append(_RULE)
        row = ""
        for x in range(BOARD_SIZE):
            if x % 3 == 0:
                row += "|"
            row += "X" if board.is_filled(x, y) else "."
        lines.append(f"{y + 1}{row}|{y + 1}")
    lines.append(_RULE)
    lines.append(_HEADER)
    return "\n".join(lines)


def format_brick(brick: Brick) -> str:
    return "\n".join(brick.rows())


def format_bricks(bricks: Sequence[Brick]) -> str:
    """Bricks side by side, three columns apart, as one picture."""
    if not bricks:
        return ""
    cells = set()
    x_offset = 0
    for brick in bricks:
        cells.update((x + x_offset, y) for x, y in brick.offsets)
        x_offset += brick.max_x + 3
    return format_brick(Brick(frozenset(cells)))


def format_game_state(state: GameState) -> str:
    return f"\ncurrent points: {state.points}\n\n{format_board(state.board)}\n\n{format_bricks(state.bricks)}"


def print_board(board: Board) -> None:
    print(format_board(board))


def print_bricks(bricks: Sequence[Brick]) -> None:
    print()
    print(format_bricks(bricks))


def print_game_state(state: GameState) -> None:
    print(format_game_state(state))


def all_bricks_listing(library: BrickLibrary) -> List[str]:
    blocks = [f"printing {len(library)} bricks from the library"]
    for i, brick in enumerate(library):
        blocks.append(f"brick {i}:\n{format_brick(brick)}\n----------------")
    return blocks


def print_all_bricks(library: Iterable[Brick]) -> None:
    for block in all_bricks_listing(BrickLibrary(library)):
        print(block)
