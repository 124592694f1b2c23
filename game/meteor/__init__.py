"""Lava meteor game - cannon vs. falling meteors"""

from .config import GameConfig
from .entities import GameStatus, Hazard, Player, Projectile
from .session import GameSession, SessionClosedError
from .store import Frame
from .update import TickResult
from .meteor_env import MeteorEnv, run_random_episode

__all__ = [
    'GameConfig',
    'GameStatus',
    'Hazard',
    'Player',
    'Projectile',
    'GameSession',
    'SessionClosedError',
    'Frame',
    'TickResult',
    'MeteorEnv',
    'run_random_episode',
]
