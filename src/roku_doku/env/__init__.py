"""Gymnasium environment for Roku Doku."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "RokuDoku-9x9-v0"

register(
    id=ENV_ID,
    entry_point="roku_doku.env.roku_doku_env:RokuDokuEnv",
)

__all__ = ["ENV_ID"]
