"""
Arcade presentation layer for the lava meteor game
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Tuple

import arcade

from .config import GameConfig
from .session import GameSession
from .store import Frame

SPARK_COLORS = [(255, 145, 0), (255, 61, 0), (255, 109, 0)]
N_SPARKS = 50


class MeteorWindow(arcade.Window):
    """Draws a session's Frame; in interactive mode it also drives the session.

    Game coordinates have y growing downward, Arcade's grow upward, so every
    draw call flips through _to_screen_y().
    """

    def __init__(self, session: GameSession, interactive: bool = True, title: str = "Lava Meteor"):
        c = session.config
        super().__init__(int(c.viewport_width), int(c.viewport_height), title)
        self.session = session
        self.interactive = interactive
        self.background_color = (26, 0, 0)  # lava darkness

        # Colors
        self.PLAYER_C = (255, 69, 0)
        self.BULLET_C = (255, 109, 0)
        self.ENEMY_C = (139, 0, 0)
        self.ENEMY_GLOW_C = (255, 61, 0, 90)
        self.HUD_C = (255, 145, 0)

        # Keyboard stands in for the tilt sensor
        self._left = False
        self._right = False
        self._was_terminal = False
        self._sparks: List[Tuple[float, float, Tuple[int, int, int, int]]] = []
        self._scatter_sparks()

    def attach(self, session: GameSession):
        self.session = session
        self._scatter_sparks()

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol in (arcade.key.LEFT, arcade.key.A):
            self._left = True
        elif symbol in (arcade.key.RIGHT, arcade.key.D):
            self._right = True
        elif symbol == arcade.key.SPACE:
            self.session.on_tap()
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.LEFT, arcade.key.A):
            self._left = False
        elif symbol in (arcade.key.RIGHT, arcade.key.D):
            self._right = False

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if self.interactive:
            self.session.on_tap()

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        # One tilt sample per frame, like a ~60 Hz accelerometer
        axis = float(self._right) - float(self._left)
        self.session.on_tilt(axis)
        self.session.advance(delta_time)

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        frame = self.session.snapshot()
        if self._was_terminal and not frame.terminal:
            self._scatter_sparks()
        self._was_terminal = frame.terminal

        self._draw_sparks()
        self._draw_entities(frame)
        self._draw_hud(frame)

    def _to_screen_y(self, y: float, h: float) -> float:
        """Bottom edge, in Arcade coordinates, of a box whose top is at game y"""
        return self.height - y - h

    def _draw_sparks(self):
        for x, y, color in self._sparks:
            arcade.draw_circle_filled(x, y, 2, color)

    def _draw_entities(self, frame: Frame):
        c = self.session.config

        # Lava cannon
        px = frame.player_x
        bottom = c.player_margin
        arcade.draw_lrbt_rectangle_filled(
            px, px + c.player_width, bottom, bottom + c.player_height, self.PLAYER_C
        )

        # Fireballs
        for p in frame.projectiles:
            b = self._to_screen_y(p.y, c.projectile_height)
            arcade.draw_lrbt_rectangle_filled(
                p.x, p.x + c.projectile_width, b, b + c.projectile_height, self.BULLET_C
            )

        # Meteors
        r = c.hazard_size / 2
        for h in frame.hazards:
            cy = self._to_screen_y(h.y, c.hazard_size) + r
            arcade.draw_circle_filled(h.x + r, cy, r + 6, self.ENEMY_GLOW_C)
            arcade.draw_circle_filled(h.x + r, cy, r, self.ENEMY_C)

    def _draw_hud(self, frame: Frame):
        arcade.draw_text(f"Score: {frame.score}", 20, self.height - 80, self.HUD_C, 26)
        if frame.terminal:
            mid = self.height / 2
            arcade.draw_text("GAME OVER", self.width / 2, mid + 20, self.BULLET_C, 36,
                             anchor_x="center", bold=True)
            arcade.draw_text("Tap to Restart", self.width / 2, mid - 30, self.BULLET_C, 20,
                             anchor_x="center")

    def _scatter_sparks(self):
        self._sparks = [
            (
                random.random() * self.width,
                random.random() * self.height,
                random.choice(SPARK_COLORS) + (int(random.random() * 255),),
            )
            for _ in range(N_SPARKS)
        ]

    def on_close(self):
        super().on_close()
        if self.interactive:
            self.session.close()


def play(config: Optional[GameConfig] = None, seed: Optional[int] = None):
    """Open a window and play with the keyboard and mouse"""
    session = GameSession(config, rng=random.Random(seed))
    MeteorWindow(session, interactive=True)
    try:
        arcade.run()
    finally:
        session.close()


def main():
    parser = argparse.ArgumentParser(description="Play Lava Meteor")
    parser.add_argument("--width", type=float, default=GameConfig.viewport_width,
                        help=f"Viewport width (default: {GameConfig.viewport_width:g})")
    parser.add_argument("--height", type=float, default=GameConfig.viewport_height,
                        help=f"Viewport height (default: {GameConfig.viewport_height:g})")
    parser.add_argument("--seed", type=int, default=None, help="Meteor spawn seed")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("Left/Right (or A/D) to move, Space or click to fire, Esc to quit.")
    play(GameConfig(viewport_width=args.width, viewport_height=args.height), seed=args.seed)


if __name__ == "__main__":
    main()
