"""
Logging setup shared by page objects, fixtures and helper modules.

Loggers are labelled ``<parent dir>/<file name>`` so a line in the CI log
points straight at the page object or fixture module that produced it,
e.g. ``pages/shipedge_orders_page.py``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger once for the test session.

    Args:
        level: Level name; defaults to the ``LOG_LEVEL`` environment
            variable, then ``INFO``.
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )


def module_label(module_file: str) -> str:
    """Return the ``<parent>/<file>`` label for a module path."""
    path = Path(module_file)
    return f"{path.parent.name}/{path.name}" if path.parent.name else path.name


def get_logger(module_file: str) -> logging.Logger:
    """
    Return a logger labelled after the calling module's file.

    Args:
        module_file: Usually ``__file__`` of the caller.
    """
    return logging.getLogger(module_label(module_file))
