"""
Game configuration
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class GameConfig:
    """Immutable per-session constants (pixels, pixels/tick, seconds)"""

    # Viewport (device-independent pixels, fixed for a session)
    viewport_width: float = 400.0
    viewport_height: float = 800.0

    # Entity sizes
    player_width: float = 60.0
    player_height: float = 30.0  # lava cannon
    projectile_width: float = 12.0
    projectile_height: float = 25.0
    hazard_size: float = 45.0  # meteor

    # Motion
    projectile_speed: float = 12.0
    hazard_speed: float = 6.0
    tilt_sensitivity: float = 20.0

    # Layout
    ground_margin: float = 20.0  # hazards touching this line end the game
    player_margin: float = 25.0  # cannon sits this far above the bottom edge
    fire_offset: float = 40.0

    # Timers
    tick_interval: float = 0.016  # ~60 Hz
    spawn_interval: float = 0.9
    max_catchup_ticks: int = 5

    def __post_init__(self):
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ValueError(
                f"viewport must be positive, got {self.viewport_width}x{self.viewport_height}"
            )
        for name in ("player_width", "player_height", "projectile_width",
                     "projectile_height", "hazard_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.player_width > self.viewport_width:
            raise ValueError("player_width does not fit in the viewport")
        if self.hazard_size > self.viewport_width:
            raise ValueError("hazard_size does not fit in the viewport")
        if self.tick_interval <= 0 or self.spawn_interval <= 0:
            raise ValueError("timer intervals must be positive")
        if self.max_catchup_ticks < 1:
            raise ValueError("max_catchup_ticks must be at least 1")

    @property
    def max_player_x(self) -> float:
        return self.viewport_width - self.player_width

    @property
    def start_player_x(self) -> float:
        return (self.viewport_width - self.player_width) / 2

    @property
    def player_top(self) -> float:
        """Collision line for meteors striking the cannon"""
        return self.viewport_height - self.player_height - self.player_margin

    @property
    def ground_line(self) -> float:
        return self.viewport_height - self.ground_margin

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "GameConfig":
        """Build a config from a dict, ignoring keys that are not config fields"""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in names})
