"""Test configuration and fixtures for the meteor game core."""

import random

import pytest

from game.meteor import GameConfig, GameSession
from game.meteor.store import EntityStore


@pytest.fixture
def config():
    """Default 400x800 viewport with the stock entity sizes."""
    return GameConfig()


@pytest.fixture
def store(config):
    return EntityStore(config)


@pytest.fixture
def session(config):
    """A seeded session; closed after the test."""
    s = GameSession(config, rng=random.Random(1234))
    yield s
    s.close()


def ground_start_y(config):
    """Hazard y that lands exactly one pixel past the ground line after one tick."""
    return config.viewport_height - config.ground_margin - config.hazard_size + 1 - config.hazard_speed
