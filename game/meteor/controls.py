"""
Input adapter: tilt samples move the cannon, taps fire (or restart)
"""

from __future__ import annotations

from typing import Callable, Optional

from .entities import Projectile
from .store import EntityStore
from .utils import clamp, sanitize_axis


class InputAdapter:

    def __init__(self, store: EntityStore, next_id: Callable[[], str],
                 on_reset: Optional[Callable[[], None]] = None):
        self.store = store
        self.config = store.config
        self.next_id = next_id
        # Called instead of a bare store reset so the owner can restart timers
        self.on_reset = on_reset or store.reset

    def on_tilt(self, axis) -> None:
        if self.store.terminal:
            return

        delta = sanitize_axis(axis) * self.config.tilt_sensitivity
        player = self.store.player
        player.x = clamp(player.x + delta, 0.0, self.config.max_player_x)

    def on_tap(self) -> Optional[Projectile]:
        if self.store.terminal:
            self.on_reset()
            return None

        c = self.config
        proj = Projectile(
            id=self.next_id(),
            x=self.store.player.x + c.player_width / 2 - c.projectile_width / 2,
            y=c.viewport_height - c.player_height - c.fire_offset,
        )
        self.store.projectiles.append(proj)
        return proj
