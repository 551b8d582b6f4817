from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall_rl.game import Command, FallingBlockGame, GameConfig, KIND_COUNT


# Action index past the last Command: do nothing and let gravity act.
ACTION_WAIT = len(Command)
NUM_ACTIONS = len(Command) + 1

_DROPS = (Command.SOFT_DROP, Command.HARD_DROP)


class FallingBlockEnv(gym.Env):
    """Gymnasium wrapper around `FallingBlockGame`.

    Actions (7 total):
      0: Move Left
      1: Move Right
      2: Rotate CW
      3: Rotate CCW
      4: Soft Drop
      5: Hard Drop
      6: Wait

    Every action except the drops is followed by one gravity tick, so an agent
    that only waits still sees pieces fall and lock.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        reward_weights: Optional[Dict[str, float]] = None,
        rejected_action_penalty: float = -0.01,
        step_penalty: float = 0.0,
        terminal_penalty: float = -1.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode

        # Reward shaping parameters
        self.rejected_action_penalty = float(rejected_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "lines": 1.0,            # reward per line cleared
            "lines_sq": 0.5,         # extra for multiple lines (quadratic)
            # Negative components (penalize increases)
            "holes": 0.1,            # penalize holes created
            "height": 0.02,          # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.grid.height, self.game.grid.width
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-KIND_COUNT, high=KIND_COUNT, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(KIND_COUNT),
            }
        )
        self.action_space = spaces.Discrete(NUM_ACTIONS)

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.get_state().astype(np.int8),
            "next": int(self.game.next_kind),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines": self.game.lines_cleared_total,
            "pieces": self.game.pieces_locked,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not 0 <= action < NUM_ACTIONS:
            raise ValueError(f"action must be in 0..{NUM_ACTIONS - 1}, got {action}")

        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        accepted = True
        rows_cleared = 0
        drop = False
        if action != ACTION_WAIT:
            cmd = Command(action)
            drop = cmd in _DROPS
            accepted = self.game.command(cmd)
            if drop and accepted:
                rows_cleared = self.game.last_result.rows_cleared
        if not drop and not self.game.is_game_over():
            rows_cleared += self.game.tick().rows_cleared

        holes_after = self.game.grid.count_holes()
        height_after = self.game.grid.get_max_height()

        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(rows_cleared),
            "lines_sq": self.reward_weights["lines_sq"] * float(rows_cleared * rows_cleared),
            "holes": -self.reward_weights["holes"] * float(max(0, holes_after - holes_before)),
            "height": -self.reward_weights["height"] * float(max(0, height_after - height_before)),
            "step": self.step_penalty,
        }
        if not accepted:
            reward_components["rejected"] = self.rejected_action_penalty

        terminated = self.game.is_game_over()
        self._steps += 1
        truncated = (not terminated) and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["accepted"] = accepted
        info["rows_cleared"] = rows_cleared
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            # Locked cells green, falling piece light, ghost dim
            state = self.game.get_state()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            img[:, :] = (30, 30, 36)
            for x, y in self.game.ghost_piece_cells():
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = (60, 60, 70)
            for y in range(h):
                for x in range(w):
                    if state[y, x] > 0:
                        color = (70, 200, 120)
                    elif state[y, x] < 0:
                        color = (220, 220, 230)
                    else:
                        continue
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None
