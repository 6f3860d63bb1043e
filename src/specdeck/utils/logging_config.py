"""Logging setup shared by the library and the server."""

from __future__ import annotations

import logging

from specdeck.config import SPECDECK_LOG_LEVEL

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = SPECDECK_LOG_LEVEL) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` with specdeck's logging configured."""
    configure_logging()
    return logging.getLogger(name)
