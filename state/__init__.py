"""Pen state management for the plotter command engine."""

from .pen_state import PenState, PenStateAccessor, STATE_KEY, create_state_summary

__all__ = ["PenState", "PenStateAccessor", "STATE_KEY", "create_state_summary"]
