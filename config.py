"""
Configuration for the plotter command engine.
"""
import os
from typing import Tuple
from dotenv import load_dotenv

load_dotenv()

# Source area (abstract screen coordinates of the stage)
# Stage centre is (0, 0), x grows to the right and y grows upwards
SOURCE_AREA = {
    "min_x": -240.0,
    "min_y": -180.0,
    "max_x": 240.0,
    "max_y": 180.0
}

# Plot area (physical media in mm)
PLOT_AREA_WIDTH_MM = float(os.getenv("PLOT_AREA_WIDTH_MM", "240"))
PLOT_AREA_HEIGHT_MM = float(os.getenv("PLOT_AREA_HEIGHT_MM", "180"))
PLOT_AREA_MM = {
    "min_x": 0.0,
    "min_y": 0.0,
    "max_x": PLOT_AREA_WIDTH_MM,
    "max_y": PLOT_AREA_HEIGHT_MM
}

# Device resolution: plotter units per mm (0.025mm per unit)
UNITS_PER_MM = float(os.getenv("UNITS_PER_MM", "40"))

# Preamble settings: VS<speed>;!ST<pen>,0;
PLOT_SPEED = int(os.getenv("PLOT_SPEED", "50"))
PEN_NUMBER = int(os.getenv("PEN_NUMBER", "1"))

# Transport
PLOTTER_URL = os.getenv("PLOTTER_URL", "http://localhost:5000/api/plotter")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "5"))
POST_IN_BACKGROUND = os.getenv("POST_IN_BACKGROUND", "true").lower() == "true"

# Where the host loads the extension from
EXTENSION_URL = os.getenv(
    "EXTENSION_URL",
    "https://ktetsuo.github.io/xcx-plotter-extension/dist/plotterExtention.mjs"
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "plotter_engine.log")


def get_source_bounds() -> Tuple[float, float, float, float]:
    """Returns (min_x, min_y, max_x, max_y) of the screen domain"""
    box = SOURCE_AREA
    return (box["min_x"], box["min_y"], box["max_x"], box["max_y"])


def get_plot_bounds() -> Tuple[float, float, float, float]:
    """Returns (min_x, min_y, max_x, max_y) of the plot area in mm"""
    box = PLOT_AREA_MM
    return (box["min_x"], box["min_y"], box["max_x"], box["max_y"])
