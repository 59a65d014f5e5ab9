from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from roku_doku.game import BlockPuzzleGame, GameConfig
from roku_doku.visualization.pygame_play import build_parser, draw_board, draw_bricks, draw_ghost


def test_draw_functions_paint_the_surface():
    game = BlockPuzzleGame(GameConfig(random_seed=0))
    game.play(game.get_valid_actions()[0])
    screen = pygame.Surface((640, 800))
    draw_board(screen, game.board.to_array(), 40, 20)
    draw_bricks(screen, game, 40, 20, selected=0)
    draw_ghost(screen, game, 4, 4, 40, 20, selected=0)
    # first cell of the board is drawn in the filled or empty colour, not the background
    assert tuple(screen.get_at((25, 25)))[:3] in ((40, 40, 48), (70, 200, 120))


def test_parser():
    args = build_parser().parse_args(["--agent", "planner", "--seed", "3"])
    assert args.agent == "planner"
    assert args.seed == 3
