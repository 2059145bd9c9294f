"""Host-side collaborators: targets, runtime events and the plotter extension."""

from .target import Target
from .runtime import Runtime
from .extension import PlotterExtension

__all__ = ["Target", "Runtime", "PlotterExtension"]
