"""
Game entity dataclasses
"""

import enum
from dataclasses import dataclass


class GameStatus(enum.Enum):
    ACTIVE = "active"
    TERMINAL = "terminal"


@dataclass
class Projectile:
    """Fireball shot upward by the cannon"""
    id: str
    x: float
    y: float


@dataclass
class Hazard:
    """Falling meteor (square, hazard_size on a side)"""
    id: str
    x: float
    y: float


@dataclass
class Player:
    """Lava cannon; only moves horizontally"""
    x: float
