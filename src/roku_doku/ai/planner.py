from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import List, NamedTuple, Optional, Sequence, Tuple

from roku_doku.game.bricks import BOARD_SIZE, Brick
from roku_doku.game.core import GameState, Move, possible_moves
from roku_doku.game.errors import ContractViolation
from roku_doku.game.resolve import resolve_bits
from roku_doku.game.rules import ScoringRules


FILL_PENALTY = 2
DEAD_END_PENALTY = 1000


class ScoredMove(NamedTuple):
    move: Move
    score: int


def _apply(bits: int, brick: Brick, x: int, y: int, streak: bool, rules: ScoringRules) -> Tuple[int, int, bool]:
    # Same transition as core.apply_move, on raw bits: place, resolve, score.
    new_bits, units = resolve_bits(bits | (brick.mask << (y * BOARD_SIZE + x)))
    return new_bits, rules.points_for_bits(streak, bits, new_bits, units), units > 0


def _positions(bits: int, brick: Brick) -> List[Tuple[int, int]]:
    mask = brick.mask
    return [
        (x, y)
        for x in range(BOARD_SIZE - brick.max_x)
        for y in range(BOARD_SIZE - brick.max_y)
        if bits & (mask << (y * BOARD_SIZE + x)) == 0
    ]


def _moves(bits: int, bricks: Tuple[Brick, ...]) -> List[Tuple[int, int, int]]:
    return [(i, x, y) for i, brick in enumerate(bricks) for x, y in _positions(bits, brick)]


def _value_after(
    bits: int,
    bricks: Tuple[Brick, ...],
    points: int,
    streak: bool,
    move: Tuple[int, int, int],
    rules: ScoringRules,
) -> int:
    """Projected score of playing ``move`` and then the rest of the batch optimally."""
    index, x, y = move
    new_bits, gained, cleared = _apply(bits, bricks[index], x, y, streak, rules)
    rest = bricks[:index] + bricks[index + 1 :]
    total = points + gained
    if not rest:
        return total - FILL_PENALTY * new_bits.bit_count()
    moves = _moves(new_bits, rest)
    if not moves:
        return total - DEAD_END_PENALTY
    return _best_value(new_bits, rest, total, cleared, moves, rules)


def _best_value(
    bits: int,
    bricks: Tuple[Brick, ...],
    points: int,
    streak: bool,
    moves: List[Tuple[int, int, int]],
    rules: ScoringRules,
) -> int:
    return max(_value_after(bits, bricks, points, streak, move, rules) for move in moves)


def _score_candidates(state: GameState, moves: Sequence[Move], rules: ScoringRules) -> List[int]:
    bits = state.board.bits
    return [
        _value_after(bits, state.bricks, state.points, state.last_move_cleared, (m.brick_index, m.pos.x, m.pos.y), rules)
        for m in moves
    ]


def _chunks(moves: List[Move], n: int) -> List[List[Move]]:
    size = -(-len(moves) // n)
    return [moves[i : i + size] for i in range(0, len(moves), size)]


class Planner:
    """Exhaustive search over the remaining bricks of the current batch.

    Every legal move is tried; after each one the rest of the batch is searched the
    same way until it is used up. A finished batch is worth its points minus two per
    filled cell, a batch that can no longer be played is worth its points minus 1000.
    A move is worth the best value reachable after it. Nothing is cached or pruned.

    ``tie_break`` picks the last ("last") or first ("first") of equally scored moves
    in enumeration order. With ``workers > 1`` the top-level moves are split across
    worker processes; the chosen move is the same as for the sequential search.
    """

    FILL_PENALTY = FILL_PENALTY
    DEAD_END_PENALTY = DEAD_END_PENALTY

    def __init__(self, rules: Optional[ScoringRules] = None, workers: int = 1, tie_break: str = "last") -> None:
        if tie_break not in ("last", "first"):
            raise ValueError(f"tie_break must be 'last' or 'first', got {tie_break!r}")
        self.rules = rules or ScoringRules()
        self.workers = max(1, int(workers))
        self.tie_break = tie_break

    def evaluate(self, state: GameState) -> List[ScoredMove]:
        """Score every legal move of ``state``, in enumeration order."""
        moves = possible_moves(state)
        if not moves:
            raise ContractViolation("the planner needs at least one legal move")
        if self.workers == 1 or len(moves) < 2:
            scores = _score_candidates(state, moves, self.rules)
        else:
            chunks = _chunks(moves, self.workers)
            with ProcessPoolExecutor(max_workers=len(chunks)) as executor:
                futures = [executor.submit(_score_candidates, state, chunk, self.rules) for chunk in chunks]
                scores = [score for future in futures for score in future.result()]
        return [ScoredMove(move, score) for move, score in zip(moves, scores)]

    def plan(self, state: GameState) -> ScoredMove:
        best: Optional[ScoredMove] = None
        for candidate in self.evaluate(state):
            if best is None or candidate.score > best.score:
                best = candidate
            elif candidate.score == best.score and self.tie_break == "last":
                best = candidate
        assert best is not None
        return best

    def choose(self, state: GameState) -> Move:
        return self.plan(state).move


def plan_move(state: GameState, rules: Optional[ScoringRules] = None) -> ScoredMove:
    return Planner(rules).plan(state)
