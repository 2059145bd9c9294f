"""
Minimal stand-in for a host sprite: a position plus extension custom state.
"""
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from host.runtime import Runtime


class Target:
    """A movable target owned by the host runtime."""

    def __init__(self, target_id: str, runtime: "Runtime", x: float = 0.0, y: float = 0.0):
        self.id = target_id
        self.runtime = runtime
        self.x = x
        self.y = y
        self._custom_state: Dict[str, Any] = {}

    def get_custom_state(self, key: str) -> Optional[Any]:
        return self._custom_state.get(key)

    def set_custom_state(self, key: str, value: Any) -> None:
        self._custom_state[key] = value

    def set_xy(self, x: float, y: float, force: bool = False) -> None:
        """Move the target and notify the runtime."""
        old_x, old_y = self.x, self.y
        self.x = x
        self.y = y
        self.runtime.emit(self.runtime.TARGET_MOVED, self, old_x, old_y, force)

    def __repr__(self) -> str:
        return f"Target({self.id!r}, x={self.x}, y={self.y})"
