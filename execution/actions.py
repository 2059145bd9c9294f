"""
Plotter primitives.

Each Action renders to one command of the device language:
PU (pen up), PD (pen down) or PG (paper feed), optionally followed by
an integer position, terminated by ';'.
"""
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from execution.errors import InvalidActionError
from execution.geometry import Point


class ActionKind(Enum):
    """Device mnemonic for each primitive."""
    PEN_UP = "PU"
    PEN_DOWN = "PD"
    PAPER_FEED = "PG"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


@dataclass(frozen=True)
class Action:
    """
    One plotter primitive with an optional target position in device units.

    A missing position means a pen transition without travel.
    """
    kind: ActionKind
    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.kind, ActionKind):
            raise InvalidActionError(f"Unknown action kind: {self.kind!r}")
        if (self.x is None) != (self.y is None):
            raise InvalidActionError(f"{self.kind.value} needs both coordinates or neither")
        if self.kind is ActionKind.PAPER_FEED and self.x is not None:
            raise InvalidActionError("Paper feed cannot carry a position")
        if self.x is not None and not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidActionError(f"{self.kind.value} position must be finite: ({self.x}, {self.y})")

    @property
    def position(self) -> Optional[Point]:
        if self.x is None:
            return None
        return Point(self.x, self.y)

    @property
    def has_position(self) -> bool:
        return self.x is not None

    def offset(self, dx: float, dy: float) -> "Action":
        """Return a copy translated by (dx, dy). No rounding is applied here."""
        if not self.has_position:
            return self
        return replace(self, x=self.x + dx, y=self.y + dy)

    def serialize(self) -> str:
        if not self.has_position:
            return f"{self.kind.value};"
        return f"{self.kind.value}{round_half_away(self.x)},{round_half_away(self.y)};"


def pen_up(position: Optional[Point] = None) -> Action:
    if position is None:
        return Action(ActionKind.PEN_UP)
    return Action(ActionKind.PEN_UP, position.x, position.y)


def pen_down(position: Optional[Point] = None) -> Action:
    if position is None:
        return Action(ActionKind.PEN_DOWN)
    return Action(ActionKind.PEN_DOWN, position.x, position.y)


def paper_feed() -> Action:
    return Action(ActionKind.PAPER_FEED)
