"""Test environment: no log file, synchronous posts."""
import os

os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("POST_IN_BACKGROUND", "false")
