"""
MeteorEnv - the lava meteor game as a Gymnasium environment
-----------------------------------------------------------
- Wraps a GameSession; one env step is exactly one update tick
- Discrete MultiDiscrete action space: [tilt(3), fire(2)]
- Vector observation: cannon x + fire cooldown + K lowest meteors
- Reward for each meteor destroyed, penalty when a meteor lands or hits the cannon

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.meteor.meteor_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .session import GameSession
from .utils import clamp, seed_everything

# tilt action index -> axis value
TILT_AXES = (-1.0, 0.0, 1.0)


class MeteorEnv(gym.Env):
    """Lava cannon vs. falling meteors"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        config: Optional[GameConfig] = None,
        max_steps: int = 3600,  # 60s at 60 ticks/s
        k_hazards: int = 5,
        fire_cooldown_steps: int = 6,
        reward_hit: float = 1.0,
        reward_alive: float = 0.001,
        reward_shot: float = 0.01,
        reward_game_over: float = 5.0,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' is implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.k_hazards = k_hazards
        self.fire_cooldown_steps = fire_cooldown_steps

        self.reward_hit = reward_hit
        self.reward_alive = reward_alive
        self.reward_shot = reward_shot
        self.reward_game_over = reward_game_over

        # tilt: 0 left, 1 none, 2 right
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Cannon: x(1) cooldown(1)
        # Each meteor: rel x(1) y(1) present(1)
        obs_dim = 2 + self.k_hazards * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.session: GameSession = None  # type: ignore
        self._step_count = 0
        self._cooldown = 0
        self._shots = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        if self.session is not None:
            self.session.close()
        # Draw the game's rng seed from the env's generator so reset(seed) is reproducible
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = GameSession(self.config, rng=random.Random(game_seed))

        self._step_count = 0
        self._cooldown = 0
        self._shots = 0

        if self._window is not None:
            self._window.attach(self.session)

        return self._get_obs(), self._get_info()

    def step(self, action):
        tilt, fire = int(action[0]), int(action[1])

        shot = 0
        self.session.on_tilt(TILT_AXES[tilt % 3])
        # A tap on the game-over screen would restart; episodes end there instead
        if fire and self._cooldown == 0 and not self.session.terminal:
            self.session.on_tap()
            self._cooldown = self.fire_cooldown_steps
            self._shots += 1
            shot = 1
        elif self._cooldown > 0:
            self._cooldown -= 1

        self.session.advance(self.config.tick_interval)
        result = self.session.last_result

        hits = self.session.advance_hits
        reward = self.reward_hit * hits - self.reward_shot * shot
        terminated = self.session.terminal
        if terminated:
            reward -= self.reward_game_over
        else:
            reward += self.reward_alive

        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()
        info["hits"] = hits
        info["reason"] = result.reason

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        c = self.config
        frame = self.session.snapshot()
        centre = frame.player_x + c.player_width / 2

        obs_parts = [
            clamp(frame.player_x / max(1e-6, c.max_player_x) * 2 - 1, -1, 1),
            clamp(self._cooldown / max(1, self.fire_cooldown_steps) * 2 - 1, -1, 1),
        ]

        # Lowest meteors first: they are the ones about to end the game
        lowest = sorted(frame.hazards, key=lambda h: -h.y)
        for i in range(self.k_hazards):
            if i < len(lowest):
                h = lowest[i]
                dx = (h.x + c.hazard_size / 2 - centre) / c.viewport_width
                y = h.y / c.viewport_height
                obs_parts += [clamp(dx, -1, 1), clamp(y * 2 - 1, -1, 1), 1.0]
            else:
                obs_parts += [0.0, 0.0, -1.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        frame = self.session.snapshot()
        return {
            "score": frame.score,
            "num_hazards": len(frame.hazards),
            "num_projectiles": len(frame.projectiles),
            "shots": self._shots,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import MeteorWindow
            self._window = MeteorWindow(self.session, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
        if self.session is not None:
            self.session.close()


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = MeteorEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.config.tick_interval)

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
