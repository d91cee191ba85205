from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from daily15.effects import RecordingEffects
from daily15.genius import GeniusConfig, GeniusGridGame


def _compute_action_mask(game: GeniusGridGame) -> np.ndarray:
    size = game.grid.size
    k = len(game.pieces)
    mask = np.zeros((k, 4, size, size), dtype=np.bool_)
    for piece_idx, rotation, row, col in game.get_valid_actions():
        mask[piece_idx, rotation, row, col] = True
    return mask


class GeniusGridEnv(gym.Env):
    """Packing puzzle as a gymnasium environment.

    Action: (piece_idx, rotation, row, col). The piece is selected, turned to
    `rotation` and dropped on the cursor cell (row, col), snapping like a
    click would.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(
        self,
        config: Optional[GeniusConfig] = None,
        render_mode: Optional[str] = None,
        cell_reward: float = 0.1,
        complete_reward: float = 10.0,
        invalid_action_penalty: float = -0.1,
        stuck_penalty: float = 0.0,
        max_episode_steps: int = 200,
    ) -> None:
        super().__init__()
        self.effects = RecordingEffects()
        self.game = GeniusGridGame(config, effects=self.effects)
        self.render_mode = render_mode

        self.cell_reward = float(cell_reward)
        self.complete_reward = float(complete_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.stuck_penalty = float(stuck_penalty)
        self.max_episode_steps = int(max_episode_steps)

        size = self.game.grid.size
        k = len(self.game.pieces)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-1, high=k, shape=(size, size), dtype=np.int8),
                "placed": spaces.MultiBinary(k),
                "rotations": spaces.MultiDiscrete([4] * k),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, 4, size, size))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "grid": self.game.get_state().astype(np.int8),
            "placed": np.array([self.game.is_placed(p.id) for p in self.game.pieces], dtype=np.int8),
            "rotations": np.array([p.rotation for p in self.game.pieces], dtype=np.int64),
        }

    def _get_info(self, mask: Optional[np.ndarray] = None) -> Dict[str, Any]:
        if mask is None:
            mask = _compute_action_mask(self.game)
        return {
            "action_mask": mask,
            "remaining": self.game.remaining,
            "complete": self.game.complete,
            "filled_ratio": self.game.grid.get_filled_ratio(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _apply(self, piece_idx: int, rotation: int, row: int, col: int) -> bool:
        piece = self.game.pieces[piece_idx]
        if self.game.selected_id != piece.id:
            self.game.select_or_deselect(piece.id)
        while self.game.pieces[piece_idx].rotation != rotation:
            self.game.rotate_selected()
        return self.game.place_selected(row, col)

    def step(self, action: np.ndarray | Tuple[int, int, int, int]):
        piece_idx, rotation, row, col = map(int, action)

        reward_components: Dict[str, float] = {}
        mask = _compute_action_mask(self.game)
        valid = (
            0 <= piece_idx < mask.shape[0]
            and 0 <= rotation < 4
            and 0 <= row < mask.shape[2]
            and 0 <= col < mask.shape[3]
            and bool(mask[piece_idx, rotation, row, col])
        )
        if valid:
            shape_cells = int(np.sum(self.game.pieces[piece_idx].shape(rotation)))
            self._apply(piece_idx, rotation, row, col)
            reward_components["cells"] = self.cell_reward * float(shape_cells)
            if self.game.complete:
                reward_components["complete"] = self.complete_reward
            mask = _compute_action_mask(self.game)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        self._steps += 1
        stuck = not self.game.complete and not mask.any()
        if stuck:
            reward_components["stuck"] = self.stuck_penalty
        terminated = bool(self.game.complete or stuck)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(sum(reward_components.values()))

        info = self._get_info(mask)
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.get_state()
        colors = [tuple(int(p.color[i : i + 2], 16) for i in (1, 3, 5)) for p in self.game.pieces]
        cell = 24
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                value = int(grid[y, x])
                if value == -1:
                    color = (44, 44, 44)
                elif value == 0:
                    color = (240, 239, 233)
                else:
                    color = colors[value - 1]
                img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
        return img

    def close(self) -> None:
        pass
