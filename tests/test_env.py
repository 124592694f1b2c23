"""Tests for the Gymnasium wrapper around the game session."""

import numpy as np
import pytest

from game.meteor import GameConfig, MeteorEnv

IDLE = np.array([1, 0])
FIRE = np.array([1, 1])


@pytest.fixture
def env():
    e = MeteorEnv(max_steps=2000)
    yield e
    e.close()


class TestSpaces:

    def test_reset_observation(self, env):
        obs, info = env.reset(seed=0)

        assert obs.shape == env.observation_space.shape == (2 + 5 * 3,)
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["score"] == 0
        assert info["num_hazards"] == 0

    def test_observations_stay_in_bounds(self, env):
        env.reset(seed=1)
        env.action_space.seed(1)
        for _ in range(500):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            if terminated or truncated:
                env.reset()

    def test_rejects_unknown_render_mode(self):
        with pytest.raises(AssertionError):
            MeteorEnv(render_mode="rgb_array")


class TestStep:

    def test_fire_respects_cooldown(self, env):
        env.reset(seed=0)

        _, _, _, _, info = env.step(FIRE)
        assert info["shots"] == 1
        assert info["num_projectiles"] == 1

        _, _, _, _, info = env.step(FIRE)
        assert info["shots"] == 1

    def test_tilt_moves_cannon(self, env):
        obs, _ = env.reset(seed=0)
        start = env.session.snapshot().player_x

        env.step(np.array([2, 0]))

        assert env.session.snapshot().player_x == start + env.config.tilt_sensitivity

    def test_idle_agent_loses(self, env):
        env.reset(seed=0)
        for _ in range(1000):
            obs, reward, terminated, truncated, info = env.step(IDLE)
            if terminated:
                break

        assert terminated
        assert reward < 0
        assert info["reason"] in ("ground", "player")

    def test_truncates_at_max_steps(self):
        env = MeteorEnv(max_steps=10, config=GameConfig(spawn_interval=100.0))
        env.reset(seed=0)
        for _ in range(9):
            _, _, terminated, truncated, _ = env.step(IDLE)
            assert not truncated
        _, _, terminated, truncated, _ = env.step(IDLE)
        assert truncated and not terminated
        env.close()

    def test_same_seed_same_episode(self):
        runs = []
        for _ in range(2):
            env = MeteorEnv()
            env.reset(seed=11)
            env.action_space.seed(11)
            trace = []
            for _ in range(300):
                obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
                trace.append((obs.tobytes(), reward))
                if terminated:
                    break
            runs.append(trace)
            env.close()
        assert runs[0] == runs[1]
