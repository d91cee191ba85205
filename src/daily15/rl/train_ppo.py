from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import daily15.env  # noqa: F401
from daily15.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper


ENV_CHOICES = {
    "daily15": "Daily15-4x4-v0",
    "blitz": "Blitz-3x3-v0",
    "genius": "GeniusGrid-6x6-v0",
}


def make_env(env_id: str, seed: int | None = None) -> gym.Env:
    env = gym.make(env_id)
    # Only flatten the MultiDiscrete placement env
    if isinstance(env.action_space, gym.spaces.MultiDiscrete):
        env = FlattenDiscreteActionWrapper(env)
    # Resample invalid actions for vanilla PPO; also forwards get_action_mask
    env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="ppo")
    p.add_argument("--env", choices=sorted(ENV_CHOICES), default="blitz")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_daily15.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()

    env_id = ENV_CHOICES[args.env]

    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO as Algo
        from sb3_contrib.common.wrappers import ActionMasker

        def mask_fn(env):
            return env.get_action_mask()

        def make_env_idx(i: int):
            def thunk():
                return ActionMasker(make_env(env_id, seed=i), mask_fn)
            return thunk
    else:
        from stable_baselines3 import PPO as Algo

        def make_env_idx(i: int):
            def thunk():
                return make_env(env_id, seed=i)
            return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = Algo(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    os.makedirs(os.path.dirname(args.save_path) or ".", exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
