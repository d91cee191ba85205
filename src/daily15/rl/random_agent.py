from __future__ import annotations

import argparse
import logging

import numpy as np
import gymnasium as gym

import daily15.env  # noqa: F401
from daily15.env import ENV_IDS

logger = logging.getLogger(__name__)


def run_random(env_id: str = "Blitz-3x3-v0", steps: int = 200, seed: int | None = None) -> float:
    env = gym.make(env_id)
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer valid actions if available
        mask = np.asarray(info.get("action_mask", []))
        valid = np.argwhere(mask)
        if valid.size:
            choice = valid[rng.integers(len(valid))]
            action = int(choice[0]) if choice.size == 1 else choice
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    logger.info(f"Random agent on {env_id}: total reward {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--env", choices=ENV_IDS, default="Blitz-3x3-v0")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    args = build_parser().parse_args()
    print(f"Random agent total reward: {run_random(args.env, args.steps, args.seed):.2f}")
