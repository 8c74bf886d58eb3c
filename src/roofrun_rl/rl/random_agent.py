from __future__ import annotations

import argparse

import gymnasium as gym
import numpy as np

import roofrun_rl.env  # noqa: F401


def run_random(episodes: int = 20, env_id: str = "Roofrun-6x6-v0", seed: int | None = None) -> dict:
    env = gym.make(env_id)
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    wins = 0
    total_reward = 0.0
    total_score = 0
    for _ in range(episodes):
        done = False
        while not done:
            # Prefer valid actions if available
            valid = np.flatnonzero(info["action_mask"])
            if valid.size:
                action = int(rng.choice(valid))
            else:
                action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated
        total_score += info["score"]
        if info["remaining"] == 0:
            wins += 1
        obs, info = env.reset()
    env.close()
    return {
        "episodes": episodes,
        "wins": wins,
        "avg_reward": total_reward / max(1, episodes),
        "avg_score": total_score / max(1, episodes),
    }


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=20)
    p.add_argument("--env", type=str, default="Roofrun-6x6-v0")
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    stats = run_random(args.episodes, args.env, args.seed)
    print(
        f"Random agent: {stats['wins']}/{stats['episodes']} boards cleared, "
        f"avg reward {stats['avg_reward']:.2f}, avg score {stats['avg_score']:.1f}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
