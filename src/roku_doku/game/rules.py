from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .board import Board


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded for one move.

    Default: 18 per cleared unit, 9 extra when the previous move also cleared, and
    one point per cell that is filled after the move but was empty before it.
    """

    unit_points: int = 18
    streak_bonus: int = 9
    fill_bonus: bool = True

    @classmethod
    def flat(cls) -> "ScoringRules":
        """20 per unit plus the streak bonus, no points for filled cells."""
        return cls(unit_points=20, streak_bonus=9, fill_bonus=False)

    def score_for_units(self, units: int, streak: bool) -> int:
        if units <= 0:
            return 0
        return units * self.unit_points + (self.streak_bonus if streak else 0)

    def points_for_bits(self, last_move_cleared: bool, old_bits: int, new_bits: int, units: int) -> int:
        points = self.score_for_units(units, last_move_cleared)
        if self.fill_bonus:
            points += (new_bits & ~old_bits).bit_count()
        return points

    def apply(self, last_move_cleared: bool, old_board: Board, new_board: Board, units: int) -> Tuple[int, bool]:
        """Return ``(points, cleared)`` for a move from ``old_board`` to the resolved ``new_board``."""
        return self.points_for_bits(last_move_cleared, old_board.bits, new_board.bits, units), units > 0
