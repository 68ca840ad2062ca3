"""
Vector math helpers on plain (x, y) floats.
"""

import math
from typing import Tuple


def dot(x0: float, y0: float, x1: float, y1: float) -> float:
    return x0 * x1 + y0 * y1


def dot2(x: float, y: float) -> float:
    """Squared length of (x, y)."""
    return x * x + y * y


def magnitude(x: float, y: float) -> float:
    return math.sqrt(x * x + y * y)


def distance(x0: float, y0: float, x1: float, y1: float) -> float:
    return magnitude(x1 - x0, y1 - y0)


def normalize(x: float, y: float) -> Tuple[float, float]:
    """Unit vector in the direction of (x, y); (0, 0) for a zero vector."""
    length = magnitude(x, y)
    if length == 0.0:
        return 0.0, 0.0
    return x / length, y / length
