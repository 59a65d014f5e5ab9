from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from roku_doku.game.bricks import BOARD_SIZE, BrickLibrary
from roku_doku.game.core import BlockPuzzleGame, GameConfig
from roku_doku.game.rules import ScoringRules


def _compute_action_mask(game: BlockPuzzleGame) -> np.ndarray:
    size = BOARD_SIZE
    k = game.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    if game.game_over:
        return mask
    for move in game.get_valid_actions():
        mask[move.brick_index, move.pos.y, move.pos.x] = True
    return mask


class RokuDokuEnv(gym.Env):
    """Place one brick of the batch per step.

    Action: ``(brick_index, x, y)``. Reward: the points the move scores under the
    game's ``ScoringRules``; an illegal action leaves the game unchanged and yields
    ``invalid_action_penalty``.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 library: Optional[BrickLibrary] = None,
                 invalid_action_penalty: float = -1.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = BlockPuzzleGame(config, rules, library)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = BOARD_SIZE
        k = self.game.config.pieces_per_set

        # Observation space: grid (0/1) and current bricks (library indices, -1 for empty)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(self.game.library) - 1, shape=(k,), dtype=np.int16),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (brick_index, x, y)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int16)
        for i, brick in enumerate(self.game.current_bricks[:k]):
            pieces[i] = self.game.library.index(brick)
        return {
            "grid": self.game.board.to_array().astype(np.int8),
            "pieces": pieces,
            "pieces_remaining": len(self.game.current_bricks),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "steps": self.game.moves_made,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int]):
        brick_index, x, y = map(int, action)
        success, gained, units = self.game.place_piece(brick_index, x, y)

        reward_components: Dict[str, float] = {}
        if success:
            reward_components["points"] = float(gained)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["units_cleared"] = units
        self._last_obs = obs
        return obs, float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.game.board.to_array()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = (70, 200, 120) if grid[y, x] else (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
