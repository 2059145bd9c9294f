"""
Pen session controller.
Turns pen and movement events of one target into plotter Actions.
"""
from typing import Optional, Protocol

from execution.actions import paper_feed, pen_down, pen_up
from execution.command_buffer import CommandBuffer
from execution.coordinate_mapper import CoordinateMapper
from execution.errors import DomainError
from execution.geometry import Point
from state.pen_state import PenState, PenStateAccessor
from utils.logger import get_logger

logger = get_logger(__name__)


class VisualLayer(Protocol):
    """On-screen pen layer mirrored alongside the plotter commands."""

    def pen_line(self, pen_state: PenState, start: Point, end: Point) -> None:
        ...

    def clear(self) -> None:
        ...


class Transport(Protocol):
    def send(self, url: str, body: str) -> None:
        ...


class PenSessionController:
    """
    State machine for one target: PEN_UP (initial) and PEN_DOWN.

    Pen-down records a pen-up travel to the current position followed by a
    bare pen-down. While the pen is down every non-forced move records a
    pen-down travel. Pen-up records a bare pen-up.
    """

    def __init__(self, state: PenStateAccessor, mapper: CoordinateMapper,
                 buffer: Optional[CommandBuffer] = None,
                 visual_layer: Optional[VisualLayer] = None,
                 transport: Optional[Transport] = None):
        """
        Initialize the controller.

        Args:
            state: Accessor for the target's pen state in host storage
            mapper: CoordinateMapper instance
            buffer: Command buffer owned by this controller (new if None)
            visual_layer: Optional on-screen layer to mirror strokes onto
            transport: Used by post(); nothing is sent without one
        """
        self.state = state
        self.mapper = mapper
        self.buffer = buffer if buffer is not None else CommandBuffer()
        self.visual_layer = visual_layer
        self.transport = transport

    @property
    def is_pen_down(self) -> bool:
        return self.state.get().pen_down

    def _map(self, position: Point) -> Optional[Point]:
        try:
            return self.mapper.to_device(position)
        except DomainError as e:
            logger.warning(f"Dropping event at ({position.x}, {position.y}): {e}")
            return None

    def _start_stroke(self, position: Point) -> bool:
        mapped = self._map(position)
        if mapped is None:
            return False
        self.buffer.append(pen_up(mapped))
        self.buffer.append(pen_down())
        return True

    def pen_down(self, position: Point) -> None:
        """Lower the pen at the target's current position."""
        pen_state = self.state.get()
        if pen_state.pen_down:
            return
        if not self._start_stroke(position):
            return
        pen_state.pen_down = True
        logger.debug(f"Pen DOWN at ({position.x}, {position.y})")

    def pen_up(self) -> None:
        """Lift the pen."""
        pen_state = self.state.get()
        if not pen_state.pen_down:
            return
        self.buffer.append(pen_up())
        pen_state.pen_down = False
        logger.debug("Pen UP")

    def on_move(self, old: Point, new: Point, forced: bool = False) -> None:
        """
        Handle a target movement.

        Args:
            old: Previous screen position
            new: New screen position
            forced: True for relocations that are not drawing motion
        """
        pen_state = self.state.get()
        if not pen_state.pen_down:
            return
        if forced:
            logger.debug(f"Ignoring forced move to ({new.x}, {new.y})")
            return

        mapped = self._map(new)
        if mapped is None:
            return
        self.buffer.append(pen_down(mapped))

        if self.visual_layer is not None:
            self.visual_layer.pen_line(pen_state, old, new)

    def paper_feed(self) -> None:
        self.buffer.append(paper_feed())

    def clear(self) -> None:
        """Discard recorded commands and the visual layer. Pen state is kept."""
        self.buffer.clear()
        if self.visual_layer is not None:
            self.visual_layer.clear()

    def inherit(self, parent_state: PenState, position: Point) -> None:
        """
        Take over a parent's pen state when this target is derived from it.

        A parent with its pen down makes this target resume drawing from its
        own position.
        """
        inherited = parent_state.clone()
        self.state.set(inherited)
        if inherited.pen_down and not self._start_stroke(position):
            inherited.pen_down = False

    def serialize(self) -> str:
        return self.buffer.serialize()

    def post(self, url: str) -> bool:
        """
        Send the serialized buffer to url.

        Returns:
            True if something was handed to the transport
        """
        body = self.serialize()
        if not body:
            logger.info("Nothing to send - command buffer is empty")
            return False
        if self.transport is None:
            logger.warning("No transport configured - commands not sent")
            return False
        self.transport.send(url, body)
        return True
