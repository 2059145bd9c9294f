"""
Errors raised by the plotter command engine.
"""


class PlotterError(Exception):
    """Base class for engine errors."""


class DomainError(PlotterError, ValueError):
    """A coordinate domain is degenerate (zero width or height) or inverted."""


class InvalidActionError(PlotterError, ValueError):
    """An Action was constructed with a position its kind does not allow."""


class CommandParseError(PlotterError, ValueError):
    """Command text could not be parsed."""
