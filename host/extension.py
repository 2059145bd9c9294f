"""
Plotter extension for the host runtime.
Wires runtime events and block commands to one PenSessionController per target.
"""
from typing import Any, Callable, Dict, Optional

from config import EXTENSION_URL, PLOTTER_URL
from execution.coordinate_mapper import CoordinateMapper
from execution.geometry import Point
from execution.pen_controller import PenSessionController, Transport, VisualLayer
from execution.transport import HttpTransport
from host.runtime import Runtime
from host.target import Target
from state.pen_state import PenStateAccessor, create_state_summary
from utils.logger import get_logger

logger = get_logger(__name__)

EXTENSION_ID = "plotterExtension"


def default_formatter(message: Dict[str, Any]) -> str:
    """Return the untranslated default text of a message."""
    return message["default"]


class PlotterExtension:
    """Block commands and event handling for plotting targets."""

    def __init__(self, runtime: Runtime,
                 transport: Optional[Transport] = None,
                 formatter: Optional[Callable[[Dict[str, Any]], str]] = None,
                 base_url: Optional[str] = None,
                 mapper: Optional[CoordinateMapper] = None,
                 visual_layer: Optional[VisualLayer] = None):
        """
        Initialize the extension and subscribe to runtime events.

        Args:
            runtime: Host runtime emitting target events
            transport: Transport for post() (HttpTransport if None)
            formatter: Message formatter for block texts
            base_url: URL the extension is served from (default from config)
            mapper: Shared CoordinateMapper (default from config)
            visual_layer: Optional on-screen pen layer shared by all targets
        """
        self.runtime = runtime
        self.transport = transport or HttpTransport()
        self.formatter = formatter or default_formatter
        self.extension_url = base_url or EXTENSION_URL
        self.mapper = mapper or CoordinateMapper()
        self.visual_layer = visual_layer
        self.controllers: Dict[str, PenSessionController] = {}

        runtime.on(Runtime.TARGET_CREATED, self._on_target_created)
        runtime.on(Runtime.TARGET_MOVED, self._on_target_moved)
        runtime.on(Runtime.RUNTIME_DISPOSED, self.dispose)

    def controller_for(self, target: Target) -> PenSessionController:
        """Return the target's controller, creating it on first use."""
        controller = self.controllers.get(target.id)
        # A recreated target with a reused id starts a fresh session
        if controller is None or controller.state.store is not target:
            controller = PenSessionController(
                PenStateAccessor(target),
                self.mapper,
                visual_layer=self.visual_layer,
                transport=self.transport
            )
            self.controllers[target.id] = controller
        return controller

    def _on_target_created(self, new_target: Target, source_target: Optional[Target]) -> None:
        if source_target is None:
            return
        parent_state = PenStateAccessor(source_target).peek()
        if parent_state is None:
            return
        self.controller_for(new_target).inherit(parent_state, Point(new_target.x, new_target.y))
        logger.debug(f"{new_target.id} inherited pen state from {source_target.id} "
                     f"(pen_down={parent_state.pen_down})")

    def _on_target_moved(self, target: Target, old_x: float, old_y: float, forced: bool) -> None:
        controller = self.controllers.get(target.id)
        if controller is None or controller.state.store is not target:
            return
        controller.on_move(Point(old_x, old_y), Point(target.x, target.y), forced)

    # Block commands

    def clear(self, target: Target) -> None:
        logger.info(f"Clear ({target.id})")
        self.controller_for(target).clear()

    def pen_down(self, target: Target) -> None:
        self.controller_for(target).pen_down(Point(target.x, target.y))

    def pen_up(self, target: Target) -> None:
        self.controller_for(target).pen_up()

    def paper_feed(self, target: Target) -> None:
        self.controller_for(target).paper_feed()

    def post(self, target: Target, url: Optional[str] = None) -> bool:
        """Send the target's commands to url (default from config)."""
        return self.controller_for(target).post(url or PLOTTER_URL)

    def commands(self, target: Target) -> str:
        return self.controller_for(target).serialize()

    def dispose(self) -> None:
        """Clear every target's buffer and forget the disposed targets."""
        logger.info(f"Runtime disposed - clearing {len(self.controllers)} command buffer(s)")
        for controller in self.controllers.values():
            controller.clear()
        self.controllers.clear()

    def state_summary(self):
        states = {
            target_id: controller.state.get()
            for target_id, controller in self.controllers.items()
        }
        return create_state_summary(states)

    def get_info(self) -> Dict[str, Any]:
        """Metadata for this extension and its blocks."""
        def block(opcode: str, func: str, message_id: str, default: str) -> Dict[str, Any]:
            return {
                "opcode": opcode,
                "blockType": "command",
                "text": self.formatter({
                    "id": f"{EXTENSION_ID}.{message_id}",
                    "default": default,
                    "description": default
                }),
                "func": func,
                "filter": ["sprite"]
            }

        return {
            "id": EXTENSION_ID,
            "name": self.formatter({
                "id": f"{EXTENSION_ID}.name",
                "default": "Plotter Extension",
                "description": "name of the extension"
            }),
            "extensionURL": self.extension_url,
            "blocks": [
                block("clear", "clear", "clear", "clear"),
                block("pen-down", "pen_down", "penDown", "pen down"),
                block("pen-up", "pen_up", "penUp", "pen up"),
                block("paper-feed", "paper_feed", "paperFeed", "paper feed"),
                block("post", "post", "post", "send to plotter [URL]"),
            ]
        }
