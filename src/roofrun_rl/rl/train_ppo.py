from __future__ import annotations

import argparse
import os

import gymnasium as gym

# Ensure envs are registered
import roofrun_rl.env  # noqa: F401
from roofrun_rl.env.wrappers import ResampleInvalidActionWrapper


def make_env(env_id: str, seed: int | None = None) -> gym.Env:
    env = gym.make(env_id)
    # Resample invalid actions for vanilla PPO; also exposes get_action_mask
    env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="maskable")
    p.add_argument("--size", choices=[6, 12], type=int, default=6,
                   help="Board size of the registered environment to train on")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_roofrun.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()

    env_id = f"Roofrun-{args.size}x{args.size}-v0"
    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO
        from sb3_contrib.common.wrappers import ActionMasker

        def mask_fn(env):
            return env.get_action_mask()

        def make_env_idx(i: int):
            def thunk():
                return ActionMasker(make_env(env_id, seed=i), mask_fn)
            return thunk

        vec_env = VecMonitor(SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)]))
        model = MaskablePPO(
            policy="MlpPolicy",
            env=vec_env,
            verbose=1,
            tensorboard_log=args.logdir,
        )
    else:
        from stable_baselines3 import PPO

        def make_env_idx(i: int):
            def thunk():
                return make_env(env_id, seed=i)
            return thunk

        vec_env = VecMonitor(SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)]))
        model = PPO(
            policy="MlpPolicy",
            env=vec_env,
            verbose=1,
            tensorboard_log=args.logdir,
        )

    os.makedirs(os.path.dirname(args.save_path) or ".", exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    print(f"Saved model to {args.save_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
