"""
Coordinate mapping.
Maps screen coordinates to plotter device units.

The plotter feeds paper along its X axis, so screen X becomes device Y and
screen Y becomes device X. Each axis is rescaled independently and points
outside the source area are not clamped.
"""
import math
from typing import Optional

from config import UNITS_PER_MM, get_source_bounds, get_plot_bounds
from execution.errors import DomainError
from execution.geometry import Point, Rect
from utils.logger import get_logger

logger = get_logger(__name__)


def map_point(point: Point, source_area: Rect, target_area: Rect,
              units_per_target_unit: float) -> Point:
    """
    Map a point from the source domain to device units.

    Args:
        point: Point in source (screen) coordinates
        source_area: Source domain
        target_area: Target domain (mm of physical media)
        units_per_target_unit: Device units per target unit

    Returns:
        Point in device units

    Raises:
        DomainError: If the source area has zero width or height, or the
            mapped point is not finite
    """
    if source_area.width == 0 or source_area.height == 0:
        raise DomainError(
            f"Source area has zero extent: {source_area.width} x {source_area.height}"
        )

    target_x = (point.y - source_area.min_y) * target_area.height / source_area.height * units_per_target_unit
    target_y = (point.x - source_area.min_x) * target_area.width / source_area.width * units_per_target_unit
    if not (math.isfinite(target_x) and math.isfinite(target_y)):
        raise DomainError(f"Point ({point.x}, {point.y}) does not map to a finite position")
    return Point(target_x, target_y)


class CoordinateMapper:
    """Maps screen coordinates to device coordinates."""

    def __init__(self, source_area: Optional[Rect] = None,
                 plot_area: Optional[Rect] = None,
                 units_per_mm: Optional[float] = None):
        """
        Initialize with both domains.

        Args:
            source_area: Screen domain (default from config)
            plot_area: Physical plot area in mm (default from config)
            units_per_mm: Device resolution (default from config)
        """
        self.source_area = source_area or Rect.from_bounds(get_source_bounds())
        self.plot_area = plot_area or Rect.from_bounds(get_plot_bounds())
        self.units_per_mm = units_per_mm if units_per_mm is not None else UNITS_PER_MM

    def to_device(self, point: Point) -> Point:
        """Convert a screen point to device units."""
        if not self.source_area.contains(point):
            logger.debug(f"Point ({point.x}, {point.y}) lies outside the source area")
        return map_point(point, self.source_area, self.plot_area, self.units_per_mm)

    def to_source(self, device_point: Point) -> Point:
        """
        Convert device units back to screen coordinates.

        Raises:
            DomainError: If the plot area is degenerate or the resolution is zero
        """
        if self.plot_area.width == 0 or self.plot_area.height == 0 or self.units_per_mm == 0:
            raise DomainError("Cannot invert mapping onto a degenerate plot area")

        # Device X carries screen Y and device Y carries screen X
        x = device_point.y / self.units_per_mm * self.source_area.width / self.plot_area.width + self.source_area.min_x
        y = device_point.x / self.units_per_mm * self.source_area.height / self.plot_area.height + self.source_area.min_y
        return Point(x, y)
