"""Logging setup for the payroll hub.

Modules log through ``logging.getLogger(__name__)``; this module only wires a
handler onto the package logger once, from ``create_app`` or a script.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any

# "src.payroll_hub.payroll_hub" when imported from the repo root.
PACKAGE_LOGGER = __name__.rsplit(".core.", 1)[0]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False
_lock = threading.Lock()


def configure_logging(*, level: int | str = logging.INFO, stream: Any = None) -> None:
    """Attach a stream handler to the package logger (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)


def reset_logging() -> None:
    """Drop handlers again. Used by tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
