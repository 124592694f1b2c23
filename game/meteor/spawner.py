"""
Meteor spawner
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from .entities import Hazard
from .store import EntityStore

logger = logging.getLogger(__name__)


class Spawner:
    """Drops one meteor just above the viewport per call.

    Timing lives with the owner (see GameSession); this only creates hazards.
    """

    def __init__(self, store: EntityStore, next_id: Callable[[], str],
                 rng: Optional[random.Random] = None):
        self.store = store
        self.config = store.config
        self.next_id = next_id
        self.rng = rng or random.Random()

    def spawn(self) -> Optional[Hazard]:
        if self.store.terminal:
            return None

        size = self.config.hazard_size
        hazard = Hazard(
            id=self.next_id(),
            x=self.rng.random() * (self.config.viewport_width - size),
            y=-size,
        )
        self.store.hazards.append(hazard)
        logger.debug("spawned %s at x=%.1f", hazard.id, hazard.x)
        return hazard
