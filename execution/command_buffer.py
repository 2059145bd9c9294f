"""
Ordered buffer of plotter Actions and its serialization to device commands.
"""
from typing import Iterator, List, Optional

from config import PLOT_SPEED, PEN_NUMBER
from execution.actions import Action, paper_feed


class CommandBuffer:
    """
    Append-only sequence of Actions for one plotting session.

    Actions are kept exactly in arrival order. Horizontal normalization is
    applied to a copy at serialization time and never to stored Actions.
    """

    def __init__(self, speed: Optional[int] = None, pen: Optional[int] = None):
        """
        Args:
            speed: Plot speed for the VS preamble (default from config)
            pen: Tool/pen number for the !ST preamble (default from config)
        """
        self.speed = speed if speed is not None else PLOT_SPEED
        self.pen = pen if pen is not None else PEN_NUMBER
        self._actions: List[Action] = []

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    @property
    def actions(self) -> List[Action]:
        """Snapshot of the stored Actions."""
        return list(self._actions)

    def append(self, action: Action) -> None:
        self._actions.append(action)

    def clear(self) -> None:
        self._actions.clear()

    @property
    def preamble(self) -> str:
        return f"VS{self.speed};!ST{self.pen},0;"

    def min_x(self) -> float:
        """Smallest x over Actions carrying a position, 0 when none do."""
        xs = [action.x for action in self._actions if action.has_position]
        return min(xs) if xs else 0

    def serialize(self) -> str:
        """
        Render the whole buffer to the device command language.

        Every Action is shifted so the leftmost recorded position sits at
        x=0, framed by the preamble and a trailing paper feed.

        Returns:
            Command string, or "" when the buffer is empty
        """
        if not self._actions:
            return ""

        xmin = self.min_x()
        parts = [self.preamble]
        parts.extend(action.offset(-xmin, 0).serialize() for action in self._actions)
        parts.append(paper_feed().serialize())
        return "".join(parts)
