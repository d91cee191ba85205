from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from daily15.daily.seeded_random import MODULUS
from daily15.effects import RecordingEffects
from daily15.sliding import ManualClock, Phase, SlidingPuzzleGame


class SlidingPuzzleEnv(gym.Env):
    """Sliding-tile puzzle as a gymnasium environment.

    Action: index of the tile to slide into the empty slot.
    The timed mode advances its countdown by one second every
    `steps_per_second` environment steps.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(
        self,
        mode: str = "daily15",
        render_mode: Optional[str] = None,
        daily_board: bool = False,
        solve_reward: float = 10.0,
        invalid_action_penalty: float = -0.1,
        step_penalty: float = -0.01,
        steps_per_second: int = 1,
        max_episode_steps: int = 2000,
    ) -> None:
        super().__init__()
        self.clock = ManualClock()
        self.effects = RecordingEffects()
        self.game = SlidingPuzzleGame(mode, effects=self.effects, ticks=self.clock)
        self.render_mode = render_mode
        self.daily_board = bool(daily_board)

        self.solve_reward = float(solve_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.steps_per_second = max(1, int(steps_per_second))
        self.max_episode_steps = int(max_episode_steps)

        size = self.game.board.size
        time_limit = self.game.config.time_limit or 0
        self.observation_space = spaces.Dict(
            {
                "tiles": spaces.Box(low=0, high=size * size - 1, shape=(size, size), dtype=np.int8),
                "time_left": spaces.Discrete(time_limit + 1),
            }
        )
        self.action_space = spaces.Discrete(size * size)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "tiles": self.game.get_state().astype(np.int8),
            "time_left": int(self.game.time_left or 0),
        }

    def _compute_action_mask(self) -> np.ndarray:
        mask = np.zeros((self.action_space.n,), dtype=np.bool_)
        for index in self.game.valid_moves():
            mask[index] = True
        return mask

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self._compute_action_mask(),
            "moves": self.game.move_count,
            "phase": self.game.phase.name.lower(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.close()
        board_seed = None if self.daily_board else int(self.np_random.integers(1, MODULUS))
        if self.game.is_timed:
            self.game.start_round(board_seed)
        else:
            self.game.reset(board_seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        accepted = self.game.move(int(action))

        reward_components: Dict[str, float] = {}
        if accepted:
            reward_components["step"] = self.step_penalty
            if self.game.solved:
                reward_components["solve"] = self.solve_reward
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        self._steps += 1
        if self.game.is_timed and self.game.phase == Phase.PLAYING and self._steps % self.steps_per_second == 0:
            self.clock.advance(1)

        terminated = self.game.phase in (Phase.SOLVED, Phase.TIMED_OUT)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return self._compute_action_mask()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        tiles = self.game.get_state()
        size = tiles.shape[0]
        cell = 24
        img = np.zeros((size * cell, size * cell, 3), dtype=np.uint8)
        for y in range(size):
            for x in range(size):
                label = int(tiles[y, x])
                if label == 0:
                    color = (30, 30, 36)
                elif label == y * size + x + 1:
                    color = (191, 161, 95)
                else:
                    color = (240, 239, 233)
                img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
        return img

    def close(self) -> None:
        self.game.close()
