"""
Watch or score a trained agent, optionally against a random-tilt baseline.

    python -m rl.evaluate models/ppo/ppo_meteor_final --vec-normalize models/ppo/vec_normalize.pkl
"""

import argparse
import time
from typing import Callable, Dict, List, Optional

import numpy as np

from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from rl.train import ALGORITHMS, build_env

Policy = Callable[[np.ndarray], np.ndarray]


def run_episodes(env, policy: Policy, n_episodes: int, seed: Optional[int] = None,
                 realtime: bool = False) -> Dict[str, List[float]]:
    """Play whole games with `policy` and collect per-game results."""
    results = {"reward": [], "score": [], "length": [], "shots": []}
    for episode in range(n_episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        total, steps, done = 0.0, 0, False
        while not done:
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            total += reward
            steps += 1
            done = terminated or truncated
            if realtime:
                time.sleep(env.unwrapped.config.tick_interval)

        results["reward"].append(total)
        results["score"].append(info["score"])
        results["length"].append(steps)
        results["shots"].append(info["shots"])
    return results


def summarise(name: str, results: Dict[str, List[float]]) -> Dict[str, float]:
    summary = {f"mean_{k}": float(np.mean(v)) for k, v in results.items()}
    summary["std_reward"] = float(np.std(results["reward"]))
    shots = sum(results["shots"])
    summary["accuracy"] = sum(results["score"]) / shots if shots else 0.0

    print(f"{name} ({len(results['reward'])} games): "
          f"score {summary['mean_score']:.2f}, "
          f"reward {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}, "
          f"length {summary['mean_length']:.0f}, accuracy {summary['accuracy']:.0%}")
    return summary


def load_policy(model_path: str, algo: str, vec_normalize_path: Optional[str] = None) -> Policy:
    if algo not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model_cls, _, flat_actions, _ = ALGORITHMS[algo]
    model = model_cls.load(model_path)

    normaliser = None
    if vec_normalize_path:
        normaliser = VecNormalize.load(
            vec_normalize_path, DummyVecEnv([lambda: build_env(flat_actions=flat_actions)])
        )

    def policy(obs):
        if normaliser is not None:
            obs = normaliser.normalize_obs(obs)
        action, _ = model.predict(obs, deterministic=True)
        return action
    return policy


def evaluate_model(model_path: str, algo: str = "ppo", n_episodes: int = 10, render: bool = True,
                   seed: Optional[int] = None, vec_normalize_path: Optional[str] = None):
    flat_actions = ALGORITHMS[algo][2] if algo in ALGORITHMS else False
    policy = load_policy(model_path, algo, vec_normalize_path)
    env = build_env(render_mode="human" if render else None, flat_actions=flat_actions)
    try:
        results = run_episodes(env, policy, n_episodes, seed=seed, realtime=render)
    finally:
        env.close()
    return summarise(algo.upper(), results)


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None):
    env = build_env()
    env.action_space.seed(seed)
    try:
        results = run_episodes(env, lambda obs: env.action_space.sample(), n_episodes, seed=seed)
    finally:
        env.close()
    return summarise("Random", results)


def main():
    parser = argparse.ArgumentParser(description="Evaluate a trained meteor agent")
    parser.add_argument("model_path", help="Path to the saved model")
    parser.add_argument("--algo", choices=sorted(ALGORITHMS), default="ppo")
    parser.add_argument("--n-episodes", type=int, default=10)
    parser.add_argument("--no-render", action="store_true", help="Disable the game window")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--vec-normalize", default=None, help="VecNormalize stats saved by PPO training")
    parser.add_argument("--compare-random", action="store_true", help="Also score a random policy")
    args = parser.parse_args()

    trained = evaluate_model(args.model_path, args.algo, args.n_episodes,
                             render=not args.no_render, seed=args.seed,
                             vec_normalize_path=args.vec_normalize)
    if args.compare_random:
        baseline = compare_with_random(args.n_episodes, seed=args.seed)
        print(f"Score gain over random: {trained['mean_score'] - baseline['mean_score']:+.2f}")


if __name__ == "__main__":
    main()
