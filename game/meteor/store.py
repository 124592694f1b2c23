"""
Entity store - the single source of truth for one game session
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from .config import GameConfig
from .entities import GameStatus, Hazard, Player, Projectile


@dataclass(frozen=True)
class Frame:
    """Read-only view of the store handed to the presentation layer"""
    projectiles: Tuple[Projectile, ...]
    hazards: Tuple[Hazard, ...]
    player_x: float
    score: int
    terminal: bool


class EntityStore:
    """Projectiles, hazards, player and score for one session.

    Not thread-safe on its own; GameSession is the only writer and serialises
    access to it.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.projectiles: List[Projectile] = []
        self.hazards: List[Hazard] = []
        self.player = Player(x=config.start_player_x)
        self.score = 0
        self.status = GameStatus.ACTIVE

    @property
    def terminal(self) -> bool:
        return self.status is GameStatus.TERMINAL

    def reset(self):
        """Return to the canonical Active state"""
        self.projectiles = []
        self.hazards = []
        self.player.x = self.config.start_player_x
        self.score = 0
        self.status = GameStatus.ACTIVE

    def end(self):
        """Enter the terminal state; both collections are discarded"""
        self.projectiles = []
        self.hazards = []
        self.status = GameStatus.TERMINAL

    def snapshot(self) -> Frame:
        # Copies; later ticks must not mutate a frame already handed out
        return Frame(
            projectiles=tuple(replace(p) for p in self.projectiles),
            hazards=tuple(replace(h) for h in self.hazards),
            player_x=self.player.x,
            score=self.score,
            terminal=self.terminal,
        )
