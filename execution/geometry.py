"""
Geometry value types shared by the mapper and the actions.
"""
from dataclasses import dataclass
from typing import Tuple

from execution.errors import DomainError


@dataclass(frozen=True)
class Point:
    """A 2D point. Units depend on the domain it belongs to."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle describing a coordinate domain.

    Used both for the screen area events arrive in and for the physical
    plot area (mm) they are rescaled to.
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise DomainError(
                f"Inverted rectangle: ({self.min_x}, {self.min_y}) - ({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_bounds(cls, bounds: Tuple[float, float, float, float]) -> "Rect":
        """Build from a (min_x, min_y, max_x, max_y) tuple."""
        min_x, min_y, max_x, max_y = bounds
        return cls(float(min_x), float(min_y), float(max_x), float(max_y))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        """True if the point lies inside or on the border."""
        return (self.min_x <= point.x <= self.max_x
                and self.min_y <= point.y <= self.max_y)
