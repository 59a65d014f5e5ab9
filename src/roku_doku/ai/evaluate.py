from __future__ import annotations

import argparse
import sys
from typing import List, NamedTuple, Optional

from roku_doku.game.bricks import BrickLibrary
from roku_doku.game.core import BlockPuzzleGame, GameConfig
from roku_doku.game.rules import ScoringRules

from .agents import AGENTS, Agent, make_agent


class EpisodeResult(NamedTuple):
    points: int
    moves: int
    units_cleared: int


def play_episode(
    agent: Agent,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
    library: Optional[BrickLibrary] = None,
    verbose: bool = False,
) -> EpisodeResult:
    """Play one game to the end (or ``max_episode_steps`` moves) with ``agent``."""
    game = BlockPuzzleGame(config, rules, library)
    while not game.game_over and game.moves_made < game.config.max_episode_steps:
        game.play(agent.choose(game.state))
        if verbose and game.moves_made % 100 == 0:
            print(f"{game.moves_made} moves done")
    return EpisodeResult(game.score, game.moves_made, game.units_cleared_total)


def _print_progress(ep_idx: int, total: int, last_points: int, last_moves: int) -> None:
    width = 30
    filled = int(width * (ep_idx + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {ep_idx + 1}/{total}  score={last_points}  moves={last_moves}"
    print(msg, end="", file=sys.stdout, flush=True)


def run_evaluation(
    agent: Agent,
    episodes: int = 100,
    seed: int = 0,
    rules: Optional[ScoringRules] = None,
    library: Optional[BrickLibrary] = None,
    max_moves: int = 10000,
    progress: bool = True,
) -> List[EpisodeResult]:
    results: List[EpisodeResult] = []
    for ep in range(episodes):
        config = GameConfig(random_seed=seed + ep, max_episode_steps=max_moves)
        result = play_episode(agent, config, rules, library)
        results.append(result)
        if progress:
            _print_progress(ep, episodes, result.points, result.moves)
    if progress:
        print()
    return results


def summarize(results: List[EpisodeResult]) -> dict:
    if not results:
        return {"episodes": 0, "min_score": 0, "max_score": 0, "avg_score": 0, "avg_moves": 0.0, "avg_units_cleared": 0.0}
    scores = [r.points for r in results]
    return {
        "episodes": len(results),
        "min_score": min(scores),
        "max_score": max(scores),
        "avg_score": sum(scores) // len(scores),
        "avg_moves": sum(r.moves for r in results) / len(results),
        "avg_units_cleared": sum(r.units_cleared for r in results) / len(results),
    }


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Roku Doku episodes with an automatic agent")
    p.add_argument("--agent", choices=sorted(AGENTS), default="planner")
    p.add_argument("--episodes", type=_positive_int, default=100)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max_moves", type=int, default=10000)
    p.add_argument("--workers", type=int, default=1, help="Processes used by the planner")
    p.add_argument("--scoring", choices=["standard", "flat"], default="standard",
                   help="standard: 18 per unit plus filled cells; flat: 20 per unit")
    p.add_argument("--unique_orientations", action="store_true",
                   help="Draw from distinct orientations instead of all four rotations per shape")
    p.add_argument("--quiet", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    rules = ScoringRules.flat() if args.scoring == "flat" else ScoringRules()
    library = BrickLibrary.standard()
    if args.unique_orientations:
        library = library.unique()
    agent = make_agent(args.agent, rules, seed=args.seed, workers=args.workers)

    results = run_evaluation(agent, args.episodes, args.seed, rules, library, args.max_moves, progress=not args.quiet)
    print(f"final scores: {[r.points for r in results]}")
    stats = summarize(results)
    print(f"min score: {stats['min_score']}")
    print(f"max score: {stats['max_score']}")
    print(f"avg score: {stats['avg_score']}")
    print(f"avg moves: {stats['avg_moves']:.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
