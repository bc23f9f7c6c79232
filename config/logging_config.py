"""Logging setup shared by the app and scripts."""

import logging
from typing import Optional

from config.defaults import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: Optional[int] = None) -> None:
    """Configure default logging if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level if level is not None else LOG_LEVEL)
