"""
Train an agent to play the meteor game with Stable-Baselines3.

    python -m rl.train --algo ppo --timesteps 200000
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.meteor import GameConfig, MeteorEnv
from rl.configs.meteor_config import (
    GAME_CONFIG, ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG,
)
from rl.metrics_callback import EpisodeStatsCallback

# algo -> (model class, hyperparameters, needs flat actions, normalise observations)
ALGORITHMS = {
    "ppo": (PPO, PPO_CONFIG, False, True),
    "dqn": (DQN, DQN_CONFIG, True, False),
}


class FlatActionWrapper(gym.ActionWrapper):
    """Expose MultiDiscrete([tilt, fire]) as one Discrete action (for DQN)."""

    def __init__(self, env):
        super().__init__(env)
        self._nvec = tuple(int(n) for n in env.action_space.nvec)
        self.action_space = spaces.Discrete(int(np.prod(self._nvec)))

    def action(self, action):
        return np.array(np.unravel_index(int(action), self._nvec), dtype=np.int64)


def build_env(render_mode: Optional[str] = None, flat_actions: bool = False) -> gym.Env:
    env = MeteorEnv(
        render_mode=render_mode,
        config=GameConfig.from_dict(GAME_CONFIG),
        **ENV_CONFIG,
        **REWARD_CONFIG,
    )
    return FlatActionWrapper(env) if flat_actions else env


def vec_env(n_envs: int, seed: int, flat_actions: bool) -> DummyVecEnv:
    def factory(i):
        def _init():
            env = Monitor(build_env(flat_actions=flat_actions))
            env.reset(seed=seed + i)
            return env
        return _init
    return DummyVecEnv([factory(i) for i in range(n_envs)])


def train(
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    model_dir: str = TRAINING_CONFIG["model_dir"],
    log_dir: str = TRAINING_CONFIG["log_dir"],
):
    """Train one algorithm; returns the model and its episode stats."""
    model_cls, hyperparams, flat_actions, normalise = ALGORITHMS[algo]
    total_timesteps = total_timesteps or TRAINING_CONFIG["total_timesteps"]
    if not normalise:
        # Off-policy replay learns from a single env here
        n_envs = 1

    save_dir = os.path.join(model_dir, algo)
    algo_log_dir = os.path.join(log_dir, algo)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(algo_log_dir, exist_ok=True)

    env = vec_env(n_envs, seed=0, flat_actions=flat_actions)
    eval_env = vec_env(1, seed=100, flat_actions=flat_actions)
    if normalise:
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    stats = EpisodeStatsCallback(log_dir=algo_log_dir, algo_name=algo)
    callbacks = [
        CheckpointCallback(
            save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
            save_path=save_dir,
            name_prefix=f"{algo}_meteor",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=save_dir,
            log_path=algo_log_dir,
            eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
            deterministic=True,
        ),
        stats,
    ]

    print(f"Training {algo.upper()} on {n_envs} env(s) for {total_timesteps:,} timesteps")
    model = model_cls(
        env=env,
        tensorboard_log=os.path.join(TRAINING_CONFIG["tensorboard_log"], algo),
        **hyperparams,
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, f"{algo}_meteor_final")
    model.save(final_path)
    if normalise:
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    summary = stats.get_summary()
    print(f"Saved {final_path}")
    if summary:
        print(f"{summary['total_episodes']} episodes, mean score {summary['mean_score']:.2f}, "
              f"survival {summary['survival_rate']:.0%}")
    return model, stats


def main():
    parser = argparse.ArgumentParser(description="Train an agent on the meteor game")
    parser.add_argument("--algo", choices=sorted(ALGORITHMS) + ["all"], default="ppo")
    parser.add_argument("--timesteps", type=int, default=None,
                        help=f"Total timesteps (default: {TRAINING_CONFIG['total_timesteps']:,})")
    parser.add_argument("--n-envs", type=int, default=4, help="Parallel envs for PPO")
    args = parser.parse_args()

    algos = sorted(ALGORITHMS) if args.algo == "all" else [args.algo]
    for algo in algos:
        train(algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
