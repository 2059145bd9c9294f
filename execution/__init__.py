"""Execution layer: coordinate mapping and plotter command generation."""

from .geometry import Point, Rect
from .coordinate_mapper import CoordinateMapper, map_point
from .actions import Action, ActionKind
from .command_buffer import CommandBuffer
from .pen_controller import PenSessionController
from .transport import HttpTransport

__all__ = [
    "Point", "Rect", "CoordinateMapper", "map_point", "Action", "ActionKind",
    "CommandBuffer", "PenSessionController", "HttpTransport",
]
