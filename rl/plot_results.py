"""
Plotting script for meteor training runs.
Generates learning curves from the EpisodeStatsCallback CSVs and a PPO/DQN comparison.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional

ALGOS = ("ppo", "dqn")
COLORS = {"dqn": "#2ecc71", "ppo": "#3498db"}


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _plot_series(ax, df: pd.DataFrame, column: str, window: int, **kwargs):
    values = smooth(df[column].values.astype(float), window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, **kwargs)


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    output_dir: str,
    window: int = 50,
):
    """Plot learning curve for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "score", "Meteors Destroyed", "orange"),
        (axes[1, 0], "survived", "Survival Rate", "green"),
        (axes[1, 1], "accuracy", "Hits per Shot", "purple"),
    ]
    for ax, column, label, color in panels:
        _plot_series(ax, df, column, window, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)
    axes[1, 0].set_ylim(0, 1.1)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
):
    """Overlay reward and score curves of every algorithm that has data."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    for ax, column, label in ((axes[0], "reward", "Episode Reward"),
                              (axes[1], "score", "Meteors Destroyed")):
        for algo, df in data.items():
            if df is not None and len(df) > 0:
                _plot_series(ax, df, column, window, label=algo.upper(), color=COLORS.get(algo))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main():
    parser = argparse.ArgumentParser(description="Plot meteor training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory with metrics CSVs")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Where to save figures")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window (episodes)")
    args = parser.parse_args()

    data = {algo: load_metrics(args.log_dir, algo) for algo in ALGOS}
    found = {algo: df for algo, df in data.items() if df is not None}
    if not found:
        print(f"No metrics found in {args.log_dir}")
        return

    for algo, df in found.items():
        plot_learning_curve(df, algo, args.output_dir, window=args.window)
    if len(found) > 1:
        plot_comparison(found, args.output_dir, window=args.window)


if __name__ == "__main__":
    main()
