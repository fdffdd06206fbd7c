"""Logging configuration for supamarker."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


def setup_logging(
    level: int = logging.INFO,
    module_name: str = "src.supamarker",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Calling this again for the same logger only updates its level, so the
    CLI can raise verbosity without stacking handlers.

    Args:
        level: Logging level (default INFO).
        module_name: Name for the logger instance. Child loggers created
            with ``logging.getLogger(__name__)`` propagate to it.
        stream: Where records go (default stderr, keeping stdout for
            command output).

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
