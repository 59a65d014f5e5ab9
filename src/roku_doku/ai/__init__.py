"""Move selection for Roku Doku: the exhaustive batch planner and baseline agents."""

from .agents import AGENTS, Agent, FirstMoveAgent, GreedyAgent, RandomAgent, make_agent
from .planner import DEAD_END_PENALTY, FILL_PENALTY, Planner, ScoredMove, plan_move

__all__ = [
    "AGENTS",
    "Agent",
    "FirstMoveAgent",
    "GreedyAgent",
    "RandomAgent",
    "make_agent",
    "DEAD_END_PENALTY",
    "FILL_PENALTY",
    "Planner",
    "ScoredMove",
    "plan_move",
]
