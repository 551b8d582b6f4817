"""Gymnasium environments for Blockfall RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "FallingBlocks-10x20-v0"

# Register default falling-block environment (7 discrete actions)
register(
    id=ENV_ID,
    entry_point="blockfall_rl.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["ENV_ID"]
