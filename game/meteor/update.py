"""
Fixed-timestep update loop: movement, collisions, terminal conditions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .entities import Hazard, Projectile
from .store import EntityStore
from .utils import aabb_overlap

logger = logging.getLogger(__name__)

GROUND = "ground"
PLAYER = "player"


@dataclass(frozen=True)
class TickResult:
    hits: int = 0
    terminal: bool = False
    reason: Optional[str] = None  # GROUND, PLAYER or None


class UpdateLoop:
    """Advances the store by exactly one tick per call to tick()"""

    def __init__(self, store: EntityStore):
        self.store = store
        self.config = store.config

    def tick(self) -> TickResult:
        if self.store.terminal:
            return TickResult(terminal=True)

        projectiles = self._advance_projectiles()
        hazards = self._advance_hazards()

        # Ground check runs before off-screen cleanup and before collisions
        if self._any_grounded(hazards):
            return self._end(GROUND)

        hazards = [h for h in hazards if h.y < self.config.viewport_height + self.config.hazard_size]

        projectiles, hazards, hits = self._resolve_hits(projectiles, hazards)

        if self._player_struck(hazards):
            return self._end(PLAYER)

        self.store.projectiles = projectiles
        self.store.hazards = hazards
        self.store.score += hits
        if hits:
            logger.debug("%d hit(s), score %d", hits, self.store.score)
        return TickResult(hits=hits)

    # ----------------------------
    # Steps
    # ----------------------------

    def _advance_projectiles(self) -> List[Projectile]:
        c = self.config
        moved = [Projectile(p.id, p.x, p.y - c.projectile_speed) for p in self.store.projectiles]
        return [p for p in moved if p.y > -c.projectile_height]

    def _advance_hazards(self) -> List[Hazard]:
        speed = self.config.hazard_speed
        return [Hazard(h.id, h.x, h.y + speed) for h in self.store.hazards]

    def _any_grounded(self, hazards: List[Hazard]) -> bool:
        ground = self.config.ground_line
        size = self.config.hazard_size
        return any(h.y + size >= ground for h in hazards)

    def _resolve_hits(
        self, projectiles: List[Projectile], hazards: List[Hazard]
    ) -> Tuple[List[Projectile], List[Hazard], int]:
        c = self.config
        remaining_projectiles = []
        remaining_hazards = list(hazards)
        hits = 0

        # Oldest projectile first; each takes the oldest hazard it overlaps
        for p in projectiles:
            for i, h in enumerate(remaining_hazards):
                if aabb_overlap(p.x, p.y, c.projectile_width, c.projectile_height,
                                h.x, h.y, c.hazard_size, c.hazard_size):
                    del remaining_hazards[i]
                    hits += 1
                    break
            else:
                remaining_projectiles.append(p)

        return remaining_projectiles, remaining_hazards, hits

    def _player_struck(self, hazards: List[Hazard]) -> bool:
        c = self.config
        px = self.store.player.x
        top = c.player_top
        for h in hazards:
            if h.x < px + c.player_width and h.x + c.hazard_size > px and h.y + c.hazard_size > top:
                return True
        return False

    def _end(self, reason: str) -> TickResult:
        self.store.end()
        return TickResult(terminal=True, reason=reason)
