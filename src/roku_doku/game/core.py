from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Tuple

from .board import Board, Position, can_place, legal_positions, place
from .bricks import Brick, BrickLibrary, RandomSource
from .errors import require
from .resolve import resolve
from .rules import ScoringRules


@dataclass
class GameConfig:
    """Configuration for a game session"""
    pieces_per_set: int = 3
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000


class Move(NamedTuple):
    # 0-based index into the current batch
    brick_index: int
    pos: Position


@dataclass(frozen=True)
class GameState:
    board: Board
    bricks: Tuple[Brick, ...]
    points: int = 0
    last_move_cleared: bool = False

    @classmethod
    def initial(cls) -> "GameState":
        return cls(board=Board.empty(), bricks=())


class MoveOutcome(NamedTuple):
    state: GameState
    units_cleared: int
    points: int


def apply_move(state: GameState, move: Move, rules: ScoringRules) -> MoveOutcome:
    index = move.brick_index
    require(0 <= index < len(state.bricks), f"brick index {index} outside batch of {len(state.bricks)}")
    brick = state.bricks[index]
    placed = place(state.board, brick, move.pos)
    board, units = resolve(placed)
    points, cleared = rules.apply(state.last_move_cleared, state.board, board, units)
    new_state = GameState(
        board=board,
        bricks=state.bricks[:index] + state.bricks[index + 1 :],
        points=state.points + points,
        last_move_cleared=cleared,
    )
    return MoveOutcome(new_state, units, points)


def perform_move(state: GameState, move: Move, rules: ScoringRules) -> GameState:
    return apply_move(state, move, rules).state


def possible_moves(state: GameState) -> List[Move]:
    """Every legal move, grouped by brick index in batch order."""
    moves: List[Move] = []
    for index, brick in enumerate(state.bricks):
        moves.extend(Move(index, pos) for pos in legal_positions(state.board, brick))
    return moves


def has_legal_move(state: GameState) -> bool:
    return any(legal_positions(state.board, brick) for brick in state.bricks)


def is_legal_move(state: GameState, move: Move) -> bool:
    if not 0 <= move.brick_index < len(state.bricks):
        return False
    x, y = move.pos
    if x < 0 or y < 0:
        return False
    return can_place(state.board, state.bricks[move.brick_index], move.pos)


def refill(state: GameState, library: BrickLibrary, rng: RandomSource, count: int = 3) -> GameState:
    """Draw a fresh batch once the current one is used up."""
    if state.bricks:
        return state
    return replace(state, bricks=library.draw_batch(rng, count))


class BlockPuzzleGame:
    """Mutable game session around the immutable ``GameState``.

    Front ends (console, pygame, gymnasium) hold one of these; the batch is refilled
    as soon as it runs out and ``game_over`` is set when nothing in the batch fits.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        library: Optional[BrickLibrary] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.library = library or BrickLibrary.standard()
        self.rng = random.Random(self.config.random_seed)
        self.state = GameState.initial()
        self.moves_made = 0
        self.units_cleared_total = 0
        self.game_over = False
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.state = GameState.initial()
        self.moves_made = 0
        self.units_cleared_total = 0
        self.game_over = False
        self._refill()

    def _refill(self) -> None:
        self.state = refill(self.state, self.library, self.rng, self.config.pieces_per_set)
        self.game_over = not has_legal_move(self.state)

    @property
    def score(self) -> int:
        return self.state.points

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_bricks(self) -> Tuple[Brick, ...]:
        return self.state.bricks

    def get_valid_actions(self) -> List[Move]:
        return possible_moves(self.state)

    def play(self, move: Move) -> MoveOutcome:
        """Apply a move that is known to be legal."""
        outcome = apply_move(self.state, move, self.rules)
        self.state = outcome.state
        self.moves_made += 1
        self.units_cleared_total += outcome.units_cleared
        self._refill()
        return outcome

    def place_piece(self, brick_index: int, x: int, y: int) -> Tuple[bool, int, int]:
        """Validate and play; returns ``(success, points_gained, units_cleared)``."""
        move = Move(brick_index, Position(x, y))
        if self.game_over or not is_legal_move(self.state, move):
            return False, 0, 0
        outcome = self.play(move)
        return True, outcome.points, outcome.units_cleared

    def get_state(self) -> dict:
        return {
            "grid": self.state.board.to_array(),
            "current_bricks": [self.library.index(b) for b in self.state.bricks],
            "pieces_remaining": len(self.state.bricks),
            "score": self.state.points,
            "last_move_cleared": self.state.last_move_cleared,
            "units_cleared_total": self.units_cleared_total,
            "moves_made": self.moves_made,
            "game_over": self.game_over,
            "filled_ratio": self.state.board.get_filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.state.points,
            "moves_made": self.moves_made,
            "units_cleared": self.units_cleared_total,
            "final_fill_ratio": self.state.board.get_filled_ratio(),
            "avg_score_per_move": self.state.points / max(1, self.moves_made),
        }
