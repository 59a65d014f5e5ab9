from __future__ import annotations

import gymnasium as gym
import numpy as np

import roku_doku.env  # noqa: F401
from roku_doku.env.roku_doku_env import RokuDokuEnv
from roku_doku.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from roku_doku.game import GameConfig
from roku_doku.rl.random_agent import run_random
from roku_doku.rl.train_ppo import build_parser, make_env


def _first_valid(mask: np.ndarray) -> tuple[int, int, int]:
    k, y, x = np.argwhere(mask)[0]
    return int(k), int(x), int(y)


def test_reset_observation():
    env = RokuDokuEnv(GameConfig())
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (9, 9)
    assert not obs["grid"].any()
    assert obs["pieces_remaining"] == 3
    assert (obs["pieces"] >= 0).all()
    assert info["action_mask"].shape == (3, 9, 9)
    assert info["action_mask"].any()
    assert env.observation_space.contains(obs)


def test_valid_step_rewards_engine_points():
    env = RokuDokuEnv()
    _, info = env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(_first_valid(info["action_mask"]))
    assert reward == float(env.game.score)
    assert reward > 0
    assert obs["pieces_remaining"] == 2
    assert obs["pieces"][2] == -1
    assert not terminated
    assert not truncated


def test_invalid_step_is_penalized():
    env = RokuDokuEnv(invalid_action_penalty=-0.5)
    _, info = env.reset(seed=2)
    env.step(_first_valid(info["action_mask"]))
    score = env.game.score
    _, reward, _, _, info = env.step((2, 0, 0))
    assert reward == -0.5
    assert env.game.score == score
    assert "invalid" in info["reward_components"]


def test_registered_env_and_render():
    env = gym.make("RokuDoku-9x9-v0", render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (9 * 12, 9 * 12, 3)
    env.close()


def test_flatten_wrapper_indices():
    env = FlattenDiscreteActionWrapper(RokuDokuEnv())
    assert env.action_space.n == 3 * 81
    assert env._unflatten(0) == (0, 0, 0)
    assert env._unflatten(1) == (0, 1, 0)
    assert env._unflatten(9) == (0, 0, 1)
    assert env._unflatten(81) == (1, 0, 0)
    env.reset(seed=3)
    mask = env.get_action_mask()
    assert mask.shape == (243,)
    idx = int(np.flatnonzero(mask)[0])
    _, reward, _, _, _ = env.step(idx)
    assert reward > 0


def test_resample_wrapper_replaces_invalid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(RokuDokuEnv()))
    env.reset(seed=4)
    mask = env.get_action_mask()
    invalid = int(np.flatnonzero(~mask)[0]) if (~mask).any() else 0
    _, reward, _, _, info = env.step(invalid)
    assert "invalid" not in info["reward_components"]
    assert reward > 0


def test_random_rollout_and_training_helpers(capsys):
    total = run_random(steps=25, seed=0)
    assert total > 0
    assert "Random agent total reward" in capsys.readouterr().out

    env = make_env(seed=0)
    assert env.action_space.n == 243
    assert build_parser().parse_args([]).algo == "ppo"
