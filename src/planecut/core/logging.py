"""Structured logging setup for planecut."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "PLANECUT_LOG_LEVEL"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured logging with consistent format.

    ``PLANECUT_LOG_LEVEL`` in the environment takes precedence over ``level``.
    """
    level = os.environ.get(LOG_LEVEL_ENV) or level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
