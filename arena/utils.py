"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple


def rand_range(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform random float in [lo, hi)"""
    return rng.random() * (hi - lo) + lo


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length (zero vector stays zero)"""
    l = math.hypot(x, y)
    if l < eps or not math.isfinite(l):
        return 0.0, 0.0
    return x / l, y / l


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap; touching circles do not collide"""
    return distance(x1, y1, x2, y2) < r1 + r2


def heading(from_x: float, from_y: float, to_x: float, to_y: float) -> float:
    """Angle (radians) of the vector from one point to another"""
    return math.atan2(to_y - from_y, to_x - from_x)


def finite_or_zero(x: float) -> float:
    """Map NaN/inf to 0.0"""
    return x if math.isfinite(x) else 0.0
