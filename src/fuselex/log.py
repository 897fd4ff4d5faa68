"""Logging helper: namespaced standard-library loggers.

Example:
    >>> from fuselex.log import get_logger
    >>> logger = get_logger("engine")
    >>> logger.name
    'fuselex.engine'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the "fuselex." namespace."""
    if not (name == "fuselex" or name.startswith("fuselex.")):
        name = f"fuselex.{name}"
    return logging.getLogger(name)
