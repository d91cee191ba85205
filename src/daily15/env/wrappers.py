from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens a MultiDiscrete action space -> Discrete(N) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order follows the MultiDiscrete components (C-order flattening), e.g.
    piece, rotation, row, col for the Genius Grid.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        self.nvec = tuple(int(n) for n in env.action_space.nvec)
        self.n = int(np.prod(self.nvec))
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, ...]:
        return tuple(int(i) for i in np.unravel_index(int(idx), self.nvec))

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return np.asarray(self.env.unwrapped.get_action_mask()).reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action is invalid, resample uniformly among valid ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        return np.asarray(self.env.unwrapped.get_action_mask()).reshape(-1)
