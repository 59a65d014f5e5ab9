from __future__ import annotations

import argparse
from typing import Callable, List, Optional

from roku_doku.ai.planner import Planner
from roku_doku.game.board import Position, can_place
from roku_doku.game.core import BlockPuzzleGame, GameConfig, GameState, Move

from .text import COLUMN_LETTERS, print_game_state

_POSITION_HINT = "second part of the input should contains a letter a-i followed by a digit 1-9 - e.g. `d3`"


class InvalidMoveInput(ValueError):
    """The typed move could not be parsed or cannot be played."""


def parse_move(text: str, state: GameState) -> Move:
    """Turn ``"<brick_no> <col><row>"`` (e.g. ``"3 d4"``) into a legal ``Move``.

    Brick numbers are 1-based; columns are ``a``-``i`` and rows ``1``-``9``.
    """
    parts = text.strip().split(" ")
    if len(parts) != 2:
        raise InvalidMoveInput("input should have 2 parts delimited with space - e.g. `1 d3`")

    first, second = parts[0].strip(), parts[1].strip()
    try:
        number = int(first)
    except ValueError:
        raise InvalidMoveInput(f"first value should be an integer: {first}") from None
    if not 0 < number <= len(state.bricks):
        raise InvalidMoveInput(f"only bricks 1..{len(state.bricks)} are available")

    if len(second) != 2 or second[0] not in COLUMN_LETTERS or second[1] not in "123456789":
        raise InvalidMoveInput(_POSITION_HINT)
    pos = Position(COLUMN_LETTERS.index(second[0]), int(second[1]) - 1)

    if not can_place(state.board, state.bricks[number - 1], pos):
        raise InvalidMoveInput(f"the brick ({first}) can't be put in the position you selected ({second})")
    return Move(number - 1, pos)


def format_move(move: Move) -> str:
    return f"{move.brick_index + 1} {COLUMN_LETTERS[move.pos.x]}{move.pos.y + 1}"


def read_user_move(
    state: GameState,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> Move:
    """Prompt until the player types a legal move."""
    while True:
        text = input_fn("\ntype a move in form `brick_no position` - e.g. `3 d4`\n")
        try:
            return parse_move(text, state)
        except InvalidMoveInput as exc:
            output(str(exc))


def run(hint: bool = False, seed: Optional[int] = None, input_fn: Callable[[str], str] = input) -> int:
    game = BlockPuzzleGame(GameConfig(random_seed=seed))
    planner = Planner(game.rules) if hint else None
    while not game.game_over:
        print_game_state(game.state)
        if planner is not None:
            suggestion = planner.plan(game.state)
            print(f"\nsuggested move: {format_move(suggestion.move)} (projected {suggestion.score})")
        game.play(read_user_move(game.state, input_fn))
    print_game_state(game.state)
    print(f"game over!\n your score: {game.score} (in {game.moves_made} moves)")
    return game.score


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Roku Doku in the terminal")
    p.add_argument("--hint", action="store_true", help="Show the planner's move before each prompt")
    p.add_argument("--seed", type=int, default=None)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    run(hint=args.hint, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
