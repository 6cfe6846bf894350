"""Logging setup for the Hyprland event monitor CLI."""

import logging
import sys
from typing import Optional, TextIO


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure root logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        stream: Destination stream (default: stderr, so JSON output on
            stdout stays machine-readable)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )
