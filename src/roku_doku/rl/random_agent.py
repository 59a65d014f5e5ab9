from __future__ import annotations

import random

import gymnasium as gym
import numpy as np

from roku_doku.env import ENV_ID


def run_random(steps: int = 200, seed: int = 0) -> float:
    """Random valid actions in the gymnasium env; returns the total reward."""
    rng = random.Random(seed)
    env = gym.make(ENV_ID)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # mask is indexed [brick, y, x]; actions are (brick, x, y)
        valid = [(int(k), int(x), int(y)) for k, y, x in zip(*np.nonzero(info["action_mask"]))]
        action = rng.choice(valid) if valid else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
