"""
Utility functions for game mechanics
"""

from __future__ import annotations
import itertools
import math
import random
from typing import Optional

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_overlap(x1, y1, w1, h1, x2, y2, w2, h2) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)"""
    return x1 < x2 + w2 and x1 + w1 > x2 and y1 < y2 + h2 and y1 + h1 > y2


def sanitize_axis(value) -> float:
    """Coerce a raw tilt sample into [-1, 1]; malformed samples read as 0"""
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(v):
        return 0.0
    return clamp(v, -1.0, 1.0)


class SequentialIds:
    """Monotonic id generator: p-1, p-2, ..."""

    def __init__(self, prefix: str, start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
