"""Logging setup shared by the Streamlit pages."""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.
    Streamlit re-runs page scripts on every interaction, so repeated calls
    only update the level.
    """
    logger = logging.getLogger("walkin")
    logger.setLevel(level)

    if not any(getattr(h, "_walkin_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._walkin_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.propagate = False
    return logger
