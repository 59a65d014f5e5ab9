from __future__ import annotations

import pytest

from roku_doku.ai import DEAD_END_PENALTY, FILL_PENALTY, FirstMoveAgent, GreedyAgent, Planner, RandomAgent, make_agent, plan_move
from roku_doku.game import Board, BrickLibrary, ContractViolation, GameState, Move, Position, ScoringRules, apply_move, perform_move, possible_moves

from .conftest import TRANSVERSAL


def _reference_value(state: GameState, rules: ScoringRules) -> int:
    """Straightforward recursion over the public state transition."""
    values = []
    for move in possible_moves(state):
        nxt = perform_move(state, move, rules)
        if not nxt.bricks:
            values.append(nxt.points - FILL_PENALTY * nxt.board.filled_count())
        elif not possible_moves(nxt):
            values.append(nxt.points - DEAD_END_PENALTY)
        else:
            values.append(_reference_value(nxt, rules))
    return max(values)


def test_single_brick_completes_the_row(almost_full_row, single):
    state = GameState(board=almost_full_row, bricks=(single,))
    best = Planner().plan(state)
    assert best.move == Move(0, Position(8, 0))
    assert best.score == 18
    assert plan_move(state) == best


def test_planner_avoids_dead_end(almost_full_row, single, full_brick):
    # Only clearing row 0 empties the board enough for the 9x9 brick to fit.
    state = GameState(board=almost_full_row, bricks=(single, full_brick))
    scored = Planner().evaluate(state)
    assert len(scored) == 73
    by_move = dict(scored)
    assert by_move[Move(0, Position(0, 1))] == 1 - DEAD_END_PENALTY
    # 18 for the row, then 27 units * 18 + 9 streak for the full brick, empty board left
    assert by_move[Move(0, Position(8, 0))] == 18 + 27 * 18 + 9
    assert Planner().plan(state).move == Move(0, Position(8, 0))


def test_all_dead_ends_still_pick_a_move(transversal_board, single, full_brick):
    state = GameState(board=transversal_board, bricks=(single, full_brick))
    best = Planner().plan(state)
    assert best.score == 3 * 18 - DEAD_END_PENALTY
    assert best.move == Move(0, Position(8, 8))


def test_tie_break_last_and_first(transversal_board, single):
    # Every empty cell clears a row, a column and a block and leaves 52 cells filled.
    state = GameState(board=transversal_board, bricks=(single,))
    scored = Planner().evaluate(state)
    assert [m.pos for m, _ in scored] == sorted(Position(*p) for p in TRANSVERSAL)
    assert {score for _, score in scored} == {3 * 18 - 2 * 52}

    assert Planner(tie_break="last").plan(state).move == Move(0, Position(8, 8))
    assert Planner(tie_break="first").plan(state).move == Move(0, Position(0, 0))


def test_matches_reference_search(transversal_board, single, domino):
    rules = ScoringRules()
    state = GameState(board=transversal_board, bricks=(single, domino, single), points=5, last_move_cleared=True)
    best = Planner(rules).plan(state)
    assert best.score == _reference_value(state, rules)


def test_matches_reference_search_with_flat_rules(transversal_board, single, domino):
    rules = ScoringRules.flat()
    state = GameState(board=transversal_board, bricks=(single, domino))
    assert Planner(rules).plan(state).score == _reference_value(state, rules)


def test_planner_is_deterministic(transversal_board, single, domino):
    state = GameState(board=transversal_board, bricks=(domino, single, single))
    planner = Planner()
    assert planner.plan(state) == planner.plan(state)


def test_parallel_search_gives_the_same_move(transversal_board, single):
    state = GameState(board=transversal_board, bricks=(single, single))
    assert Planner(workers=2).plan(state) == Planner(workers=1).plan(state)


def test_planner_needs_a_legal_move(transversal_board, domino):
    with pytest.raises(ContractViolation):
        Planner().plan(GameState(board=transversal_board, bricks=(domino,)))
    with pytest.raises(ValueError):
        Planner(tie_break="middle")


def test_baseline_agents(almost_full_row, single):
    state = GameState(board=almost_full_row, bricks=(single,))
    assert FirstMoveAgent().choose(state) == Move(0, Position(0, 1))
    assert GreedyAgent().choose(state) == Move(0, Position(8, 0))
    assert RandomAgent(seed=1).choose(state) in possible_moves(state)
    assert make_agent("planner").choose(state) == Move(0, Position(8, 0))
    assert isinstance(make_agent("planner"), Planner)
    with pytest.raises(ValueError):
        make_agent("oracle")


def test_agents_reject_terminal_states(transversal_board, domino):
    state = GameState(board=transversal_board, bricks=(domino,))
    with pytest.raises(ContractViolation):
        FirstMoveAgent().choose(state)


@pytest.mark.parametrize("rules", [ScoringRules(), ScoringRules.flat()])
@pytest.mark.parametrize("streak", [False, True])
def test_single_brick_scores_match_the_engine(rules, streak):
    # Row 0, column 8 and the top-left block are each one or two cells short.
    cells = {(x, 0) for x in range(7)} | {(8, y) for y in range(1, 8)} | {(x, y) for x in range(3) for y in range(3)}
    cells -= {(1, 1)}
    board = Board.from_cells(sorted(cells))
    for brick in BrickLibrary.standard().unique():
        state = GameState(board=board, bricks=(brick,), points=7, last_move_cleared=streak)
        for move, score in Planner(rules).evaluate(state):
            outcome = apply_move(state, move, rules)
            assert score == outcome.state.points - FILL_PENALTY * outcome.state.board.filled_count()
