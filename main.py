"""
Main entrypoint for the plotter command engine.
Replays a JSON event script against one target and prints the command string.

Event script format:
    [
      {"op": "pen_down"},
      {"op": "move", "x": 10, "y": 0},
      {"op": "move", "x": 0, "y": 0, "forced": true},
      {"op": "pen_up"},
      {"op": "feed"},
      {"op": "clear"}
    ]
"""
import argparse
import json
import sys
from typing import Any, Dict, List

from config import PLOTTER_URL, UNITS_PER_MM, get_plot_bounds
from execution.transport import HttpTransport
from host.extension import PlotterExtension
from host.runtime import Runtime
from utils.logger import setup_logger

# Setup logging
logger = setup_logger()


def load_events(filepath: str) -> List[Dict[str, Any]]:
    """Load and parse an event script."""
    with open(filepath, 'r') as f:
        events = json.load(f)
    if not isinstance(events, list):
        raise ValueError("Event script must be a JSON list")
    return events


def replay(events: List[Dict[str, Any]], extension: PlotterExtension, target) -> str:
    """
    Apply events to a target.

    Returns:
        The target's serialized command string
    """
    for i, event in enumerate(events):
        op = event.get("op")
        if op == "pen_down":
            extension.pen_down(target)
        elif op == "pen_up":
            extension.pen_up(target)
        elif op == "move":
            try:
                x, y = float(event["x"]), float(event["y"])
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping event {i}: bad move {event!r} ({e})")
                continue
            target.set_xy(x, y, force=bool(event.get("forced", False)))
        elif op == "feed":
            extension.paper_feed(target)
        elif op == "clear":
            extension.clear(target)
        else:
            logger.warning(f"Skipping event {i}: unknown op {op!r}")
    return extension.commands(target)


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Replay pen events into plotter commands")
    parser.add_argument("events", help="Path to JSON event script")
    parser.add_argument("--target", default="sprite1", help="Target id")
    parser.add_argument("--x", type=float, default=0.0, help="Initial screen X")
    parser.add_argument("--y", type=float, default=0.0, help="Initial screen Y")
    parser.add_argument("--post", nargs="?", const=PLOTTER_URL, default=None,
                        help=f"Post the commands (default URL: {PLOTTER_URL})")
    args = parser.parse_args(argv)

    logger.info(f"Plot area: {get_plot_bounds()} mm, {UNITS_PER_MM} units/mm")

    try:
        events = load_events(args.events)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load event script: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    runtime = Runtime()
    extension = PlotterExtension(runtime, transport=HttpTransport(background=False))
    target = runtime.create_target(args.target, args.x, args.y)

    commands = replay(events, extension, target)
    print(commands)

    if args.post:
        extension.post(target, args.post)

    return 0


if __name__ == "__main__":
    sys.exit(main())
