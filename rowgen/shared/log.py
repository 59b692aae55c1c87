"""Logging setup for the rowgen command line tools."""

from __future__ import annotations

import logging
import sys


def setup_logging(verbosity: int) -> None:
    """
    Configure the ``rowgen`` logger based on verbosity level.

    Log records go to stderr; stdout is reserved for generated code.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root_logger = logging.getLogger("rowgen")
    root_logger.setLevel(level)
    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False
