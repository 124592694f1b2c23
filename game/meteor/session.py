"""
GameSession - owns the entity store and serialises every command against it
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Callable, Optional

from .config import GameConfig
from .controls import InputAdapter
from .entities import Projectile
from .spawner import Spawner
from .store import EntityStore, Frame
from .timers import PeriodicTimer
from .update import TickResult, UpdateLoop
from .utils import SequentialIds

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    """Raised when a command reaches a session after close()"""


class GameSession:
    """One running game.

    Input callbacks (tilt, tap), the update timer and the spawn timer all go
    through this object, one at a time, so every tick sees a consistent store.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        projectile_ids: Optional[Callable[[], str]] = None,
        hazard_ids: Optional[Callable[[], str]] = None,
    ):
        self.config = config or GameConfig()
        self.store = EntityStore(self.config)
        self.update_loop = UpdateLoop(self.store)
        self.spawner = Spawner(self.store, hazard_ids or SequentialIds("h"), rng=rng)
        self.controls = InputAdapter(
            self.store, projectile_ids or SequentialIds("p"), on_reset=self._reset
        )

        self.last_result = TickResult()
        # Hits summed over every tick run by the latest advance() or tick()
        self.advance_hits = 0
        self._lock = threading.RLock()
        self._closed = False

        self._tick_timer = PeriodicTimer(
            self.config.tick_interval, self._on_tick, self.config.max_catchup_ticks
        )
        self._spawn_timer = PeriodicTimer(
            self.config.spawn_interval, self.spawner.spawn, self.config.max_catchup_ticks
        )
        self._start_timers()
        logger.info("session started (%gx%g)", self.config.viewport_width, self.config.viewport_height)

    # ----------------------------
    # Commands
    # ----------------------------

    def on_tilt(self, axis) -> None:
        with self._lock:
            self._check_open()
            self.controls.on_tilt(axis)

    def on_tap(self) -> Optional[Projectile]:
        with self._lock:
            self._check_open()
            return self.controls.on_tap()

    def advance(self, elapsed: float) -> int:
        """Feed `elapsed` seconds to the timers; returns the number of ticks run.

        Hits from all ticks run by this call are summed in `advance_hits`;
        `last_result` only describes the final tick.
        """
        with self._lock:
            self._check_open()
            self.advance_hits = 0
            ticks = self._tick_timer.advance(elapsed)
            self._spawn_timer.advance(elapsed)
            return ticks

    def tick(self) -> TickResult:
        """Run one update tick immediately, outside the timer"""
        with self._lock:
            self._check_open()
            self.advance_hits = 0
            self._on_tick()
            return self.last_result

    def spawn(self):
        with self._lock:
            self._check_open()
            return self.spawner.spawn()

    def snapshot(self) -> Frame:
        with self._lock:
            return self.store.snapshot()

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._tick_timer.cancel()
            self._spawn_timer.cancel()
            self._closed = True
            logger.info("session closed")

    # ----------------------------
    # State
    # ----------------------------

    @property
    def score(self) -> int:
        with self._lock:
            return self.store.score

    @property
    def terminal(self) -> bool:
        with self._lock:
            return self.store.terminal

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def timers_running(self) -> bool:
        return self._tick_timer.running and self._spawn_timer.running

    # ----------------------------
    # Internals
    # ----------------------------

    def _check_open(self):
        if self._closed:
            raise SessionClosedError("game session is closed")

    def _start_timers(self):
        self._tick_timer.start()
        self._spawn_timer.start()

    def _stop_timers(self):
        self._tick_timer.stop()
        self._spawn_timer.stop()

    def _on_tick(self):
        was_terminal = self.store.terminal
        self.last_result = self.update_loop.tick()
        self.advance_hits += self.last_result.hits
        if self.last_result.terminal and not was_terminal:
            self._stop_timers()
            logger.info("game over (%s), score %d", self.last_result.reason, self.store.score)

    def _reset(self):
        self.store.reset()
        self.last_result = TickResult()
        self._start_timers()
        logger.info("session reset")
