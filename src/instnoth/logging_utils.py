# logging_utils.py
from __future__ import annotations

import logging
import sys
from typing import Union

from . import settings

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time (click swaps it in tests)."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr


def configure_logging(level: Union[int, str, None] = None, debug: bool = False) -> None:
    """
    Attach one stderr handler to the root logger.

    Safe to call repeatedly: later calls only adjust the level.
    """
    if debug:
        level = logging.DEBUG
    elif level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(root, "_instnoth_configured", False):
        return

    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    root.addHandler(handler)
    setattr(root, "_instnoth_configured", True)

    logging.getLogger(__name__).debug("Logging initialized (level=%s)", logging.getLevelName(level))
