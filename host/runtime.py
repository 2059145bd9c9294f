"""
Minimal host runtime: owns targets and broadcasts their lifecycle events.
"""
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from host.target import Target
from utils.logger import get_logger

logger = get_logger(__name__)


class Runtime:
    """Event emitter for target creation, movement and disposal."""

    TARGET_CREATED = "targetWasCreated"
    TARGET_MOVED = "TARGET_MOVED"
    RUNTIME_DISPOSED = "RUNTIME_DISPOSED"

    def __init__(self):
        self.targets: Dict[str, Target] = {}
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)

    def on(self, event: str, callback: Callable) -> None:
        self._listeners[event].append(callback)

    def emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    def create_target(self, target_id: str, x: Optional[float] = None, y: Optional[float] = None,
                      source: Optional[Target] = None) -> Target:
        """
        Create a target, optionally derived from an existing one.

        A derived target starts at its source's position unless x/y are given.
        """
        if target_id in self.targets:
            raise ValueError(f"Target already exists: {target_id}")
        if x is None:
            x = source.x if source is not None else 0.0
        if y is None:
            y = source.y if source is not None else 0.0

        target = Target(target_id, self, x, y)
        self.targets[target_id] = target
        logger.debug(f"Created {target!r} (source={source.id if source else None})")
        self.emit(self.TARGET_CREATED, target, source)
        return target

    def get_target(self, target_id: str) -> Optional[Target]:
        return self.targets.get(target_id)

    def dispose(self) -> None:
        self.emit(self.RUNTIME_DISPOSED)
        self.targets.clear()
