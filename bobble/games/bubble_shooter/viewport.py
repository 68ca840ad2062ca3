"""
World <-> screen transform.

The world is 100 units tall; the screen height maps onto it exactly and the
world origin sits at the horizontal centre of the screen.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Viewport:
    """Affine mapping between screen pixels and world units."""
    width: float = 450.0
    height: float = 1000.0
    world_height: float = 100.0
    padding_bottom: float = 0.0  # Screen pixels

    @property
    def scale(self) -> float:
        return self.height / self.world_height

    @property
    def offset_x(self) -> float:
        return self.width / 2

    @property
    def offset_y(self) -> float:
        return -self.padding_bottom

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.scale * x + self.offset_x, self.scale * y + self.offset_y

    def screen_to_world(self, x: float, y: float) -> Tuple[float, float]:
        return (x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale

    def size_world_to_screen(self, w: float, h: float) -> Tuple[float, float]:
        return self.scale * w, self.scale * h

    def size_screen_to_world(self, w: float, h: float) -> Tuple[float, float]:
        return w / self.scale, h / self.scale
