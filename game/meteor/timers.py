"""
Simulated-time periodic timers
"""

from __future__ import annotations

import math
from typing import Callable


class PeriodicTimer:
    """Fires `callback` every `interval` seconds of time fed to advance().

    A stopped timer ignores elapsed time entirely, so nothing queues up while
    it is off. At most `max_catchup` firings happen per advance(); any extra
    backlog is dropped. cancel() is permanent.
    """

    def __init__(self, interval: float, callback: Callable[[], None], max_catchup: int = 5):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.callback = callback
        self.max_catchup = max_catchup
        self.running = False
        self.cancelled = False
        self._elapsed = 0.0

    def start(self):
        if self.cancelled:
            return
        self.running = True
        self._elapsed = 0.0

    def stop(self):
        self.running = False
        self._elapsed = 0.0

    def cancel(self):
        self.stop()
        self.cancelled = True

    def advance(self, dt: float) -> int:
        # NaN or inf would poison the accumulator for good
        if not self.running or not math.isfinite(dt) or dt <= 0:
            return 0

        self._elapsed += dt
        fired = 0
        while self.running and self._elapsed >= self.interval:
            if fired >= self.max_catchup:
                self._elapsed = 0.0
                break
            self._elapsed -= self.interval
            fired += 1
            # May stop this timer (e.g. game over)
            self.callback()
        return fired
