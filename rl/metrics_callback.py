"""
Per-game statistics recorded while an agent trains.
"""

import os
import csv
from typing import Any, Dict, List

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback

COLUMNS = ["timestep", "episode", "reward", "length", "score", "shots", "accuracy", "survived"]


class EpisodeStatsCallback(BaseCallback):
    """Writes one CSV row per finished game and mirrors it to TensorBoard.

    A game counts as survived when it hit the env's step limit rather than
    ending on a landed meteor or a struck cannon.
    """

    def __init__(self, log_dir: str, algo_name: str, verbose: int = 0):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name
        self.csv_path = os.path.join(log_dir, f"{algo_name}_metrics.csv")
        self.rows: List[Dict[str, float]] = []
        self._file = None
        self._writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self._file = open(self.csv_path, "w", newline="")
        self._writer = csv.DictWriter(self._file, fieldnames=COLUMNS)
        self._writer.writeheader()

    def _on_step(self) -> bool:
        for info, done in zip(self.locals.get("infos", []), self.locals.get("dones", [])):
            # Monitor puts "episode" into the info of a game's last step
            if done and "episode" in info:
                self._record(info)
        return True

    def _record(self, info: Dict[str, Any]):
        shots = info.get("shots", 0)
        score = info.get("score", 0)
        row = {
            "timestep": self.num_timesteps,
            "episode": len(self.rows) + 1,
            "reward": info["episode"]["r"],
            "length": info["episode"]["l"],
            "score": score,
            "shots": shots,
            "accuracy": score / shots if shots else 0.0,
            "survived": 1.0 if info.get("TimeLimit.truncated", False) else 0.0,
        }
        self.rows.append(row)

        if self._writer:
            self._writer.writerow(row)
            self._file.flush()
        if self.model is not None:
            for key in ("score", "accuracy", "survived"):
                self.logger.record(f"meteor/{key}", row[key])
        if self.verbose > 0 and len(self.rows) % 10 == 0:
            recent = self.rows[-10:]
            print(f"[{self.algo_name}] game {len(self.rows)}: "
                  f"mean score (last 10) {np.mean([r['score'] for r in recent]):.1f}")

    def _on_training_end(self) -> None:
        if self._file:
            self._file.close()
            self._file = None

    def get_summary(self) -> Dict[str, Any]:
        if not self.rows:
            return {}
        column = lambda k: np.array([r[k] for r in self.rows], dtype=float)
        return {
            "total_episodes": len(self.rows),
            "mean_reward": float(column("reward").mean()),
            "std_reward": float(column("reward").std()),
            "mean_score": float(column("score").mean()),
            "survival_rate": float(column("survived").mean()),
        }
