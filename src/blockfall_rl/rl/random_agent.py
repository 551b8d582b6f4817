from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

import gymnasium as gym

# Importing the package registers the env
from blockfall_rl.env import ENV_ID
from blockfall_rl.utils.logging import setup_logger


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> Tuple[float, int]:
    env = gym.make(ENV_ID)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d: score=%d lines=%d", episodes, info["score"], info["lines"])
            obs, info = env.reset()
    env.close()
    logger.info("Random agent total reward: %.2f over %d steps", total_reward, steps)
    return total_reward, episodes


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger()
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
