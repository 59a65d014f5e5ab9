from __future__ import annotations

import argparse
from typing import List, Optional

import numpy as np
import pygame

from roku_doku.ai.agents import AGENTS, Agent, make_agent
from roku_doku.game.board import Position, can_place
from roku_doku.game.core import BlockPuzzleGame, GameConfig


def _color_for_value(v: int) -> tuple[int, int, int]:
    return (40, 40, 48) if v == 0 else (70, 200, 120)


def draw_board(screen: pygame.Surface, grid: np.ndarray, cell_size: int, margin: int) -> None:
    h, w = grid.shape
    screen.fill((15, 15, 20))
    for y in range(h):
        for x in range(w):
            rect = pygame.Rect(margin + x * cell_size, margin + y * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, _color_for_value(int(grid[y, x])), rect)
    # 3x3 block borders
    for i in range(0, w + 1, 3):
        x = margin + i * cell_size - 1
        pygame.draw.line(screen, (200, 200, 210), (x, margin - 1), (x, margin + h * cell_size - 1), 2)
    for i in range(0, h + 1, 3):
        y = margin + i * cell_size - 1
        pygame.draw.line(screen, (200, 200, 210), (margin - 1, y), (margin + w * cell_size - 1, y), 2)


def draw_bricks(screen: pygame.Surface, game: BlockPuzzleGame, cell_size: int, margin: int, selected: int) -> None:
    # Draw the current batch at the right side
    x0 = margin * 2 + 9 * cell_size
    y0 = margin
    for idx, brick in enumerate(game.current_bricks):
        off_y = y0 + idx * (cell_size * 6)
        for px, py in brick.offsets:
            rect = pygame.Rect(x0 + px * cell_size, off_y + py * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, (200, 180, 60), rect)
        if idx == selected:
            outline = pygame.Rect(x0, off_y, brick.width * cell_size, brick.height * cell_size)
            pygame.draw.rect(screen, (255, 255, 255), outline, 2)


def draw_ghost(screen: pygame.Surface, game: BlockPuzzleGame, grid_x: int, grid_y: int,
               cell_size: int, margin: int, selected: int) -> None:
    if not (0 <= selected < len(game.current_bricks)) or grid_x < 0 or grid_y < 0:
        return
    brick = game.current_bricks[selected]
    color = (120, 220, 140) if can_place(game.board, brick, Position(grid_x, grid_y)) else (220, 120, 120)
    for px, py in brick.offsets:
        x = margin + (grid_x + px) * cell_size
        y = margin + (grid_y + py) * cell_size
        pygame.draw.rect(screen, color, pygame.Rect(x, y, cell_size - 1, cell_size - 1), 2)


def run(agent: Optional[Agent] = None, seed: Optional[int] = None, move_ms: int = 400) -> None:
    """Mouse play, or watch ``agent`` play when one is given."""
    pygame.init()
    try:
        game = BlockPuzzleGame(GameConfig(random_seed=seed))
        cell_size = 40
        margin = 20
        width = margin * 3 + 9 * cell_size + 6 * cell_size
        height = margin * 2 + 18 * cell_size
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Roku Doku" + (" - Agent" if agent is not None else ""))
        font = pygame.font.SysFont(None, 24)

        selected = 0
        key_to_index = {
            pygame.K_1: 0,
            pygame.K_2: 1,
            pygame.K_3: 2,
            pygame.K_KP1: 0,
            pygame.K_KP2: 1,
            pygame.K_KP3: 2,
        }

        running = True
        clock = pygame.time.Clock()
        last_move = pygame.time.get_ticks()
        while running:
            clicked = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in key_to_index:
                        if key_to_index[event.key] < len(game.current_bricks):
                            selected = key_to_index[event.key]
                    elif event.key == pygame.K_n:
                        game.reset()
                        selected = 0
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    clicked = True

            mx, my = pygame.mouse.get_pos()
            grid_x = (mx - margin) // cell_size
            grid_y = (my - margin) // cell_size

            if not game.game_over:
                if agent is not None:
                    now = pygame.time.get_ticks()
                    if now - last_move >= move_ms:
                        game.play(agent.choose(game.state))
                        last_move = now
                elif clicked and game.place_piece(selected, grid_x, grid_y)[0]:
                    selected = 0

            draw_board(screen, game.board.to_array(), cell_size, margin)
            if agent is None:
                draw_ghost(screen, game, grid_x, grid_y, cell_size, margin, selected)
            draw_bricks(screen, game, cell_size, margin, selected if agent is None else -1)
            info_lines = [
                f"Score: {game.score}",
                f"Moves: {game.moves_made}",
                "Select: 1/2/3",
                "Place: Left click",
                "Reset: N",
            ]
            x_text = margin * 2 + 9 * cell_size
            y_text = margin + 18 * cell_size - len(info_lines) * 20
            for i, txt in enumerate(info_lines):
                img = font.render(txt, True, (230, 230, 230))
                screen.blit(img, (x_text, y_text + i * 20))
            if game.game_over:
                over = font.render("Game Over - Press N to reset", True, (255, 100, 100))
                screen.blit(over, (margin, 2))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Roku Doku in a pygame window")
    p.add_argument("--agent", choices=sorted(AGENTS), default=None, help="Watch an agent instead of playing")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--move_ms", type=int, default=400)
    p.add_argument("--workers", type=int, default=1)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    agent = make_agent(args.agent, seed=args.seed, workers=args.workers) if args.agent else None
    run(agent, seed=args.seed, move_ms=args.move_ms)


if __name__ == "__main__":  # pragma: no cover
    main()
