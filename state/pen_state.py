"""
Per-target pen state.
The state lives in the host's per-target custom state; the engine only reads
and writes it through PenStateAccessor.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

STATE_KEY = "plotter.pen"


@dataclass
class PenState:
    """Pen state of one target. Only pen_down drives the command engine."""
    pen_down: bool = False
    color: float = 66.66
    saturation: float = 100.0
    brightness: float = 100.0
    transparency: float = 0.0
    pen_attributes: Dict[str, Any] = field(
        default_factory=lambda: {"color4f": [0.0, 0.0, 1.0, 1.0], "diameter": 1}
    )

    def clone(self) -> "PenState":
        return copy.deepcopy(self)


class CustomStateStore(Protocol):
    """Key-value storage a host target exposes for extension state."""

    def get_custom_state(self, key: str) -> Optional[Any]:
        ...

    def set_custom_state(self, key: str, value: Any) -> None:
        ...


class PenStateAccessor:
    """Reads and writes a target's PenState in the host's storage."""

    def __init__(self, store: CustomStateStore, key: str = STATE_KEY):
        self.store = store
        self.key = key

    def get(self) -> PenState:
        """Return the stored state, creating a pen-up default on first access."""
        state = self.store.get_custom_state(self.key)
        if state is None:
            state = PenState()
            self.store.set_custom_state(self.key, state)
        return state

    def set(self, state: PenState) -> None:
        self.store.set_custom_state(self.key, state)

    def peek(self) -> Optional[PenState]:
        """Return the stored state without creating one."""
        return self.store.get_custom_state(self.key)


def create_state_summary(states: Dict[str, PenState]) -> List[Dict[str, Any]]:
    """Plain dicts for status reporting, one per target id."""
    return [
        {"target": target_id, "pen_down": state.pen_down, "color": state.color}
        for target_id, state in states.items()
    ]
