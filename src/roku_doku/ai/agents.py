from __future__ import annotations

import random
from typing import Callable, Dict, Optional, Protocol

from roku_doku.game.core import GameState, Move, apply_move, possible_moves
from roku_doku.game.errors import require
from roku_doku.game.rules import ScoringRules

from .planner import Planner


class Agent(Protocol):
    def choose(self, state: GameState) -> Move:
        ...


class RandomAgent:
    """Uniformly random legal move."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose(self, state: GameState) -> Move:
        moves = possible_moves(state)
        require(bool(moves), "no legal move to choose from")
        return self.rng.choice(moves)


class FirstMoveAgent:
    """Lowest brick index, then lowest x, then lowest y."""

    def choose(self, state: GameState) -> Move:
        moves = possible_moves(state)
        require(bool(moves), "no legal move to choose from")
        return moves[0]


class GreedyAgent:
    """Move with the most immediate points; the first such move on ties."""

    def __init__(self, rules: Optional[ScoringRules] = None) -> None:
        self.rules = rules or ScoringRules()

    def choose(self, state: GameState) -> Move:
        moves = possible_moves(state)
        require(bool(moves), "no legal move to choose from")
        return max(moves, key=lambda m: apply_move(state, m, self.rules).points)


AGENTS: Dict[str, Callable[..., Agent]] = {
    "random": lambda rules, seed, workers: RandomAgent(seed),
    "first": lambda rules, seed, workers: FirstMoveAgent(),
    "greedy": lambda rules, seed, workers: GreedyAgent(rules),
    "planner": lambda rules, seed, workers: Planner(rules, workers=workers),
}


def make_agent(name: str, rules: Optional[ScoringRules] = None, seed: Optional[int] = None, workers: int = 1) -> Agent:
    if name not in AGENTS:
        raise ValueError(f"unknown agent {name!r}, choose from {sorted(AGENTS)}")
    return AGENTS[name](rules or ScoringRules(), seed, workers)
