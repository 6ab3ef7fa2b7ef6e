"""Logging setup shared by the converters, fetch clients, store and CLI.

Modules log through ``get_logger(__name__)``: skipped clue references and
skipped puzzles at WARNING, fetch failures at ERROR, stored files and
completed conversions at INFO, numbering and serialization counts at DEBUG.
"""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Install one stream handler on the root logger.

    ``main.py`` calls this with the level from ``--log-level`` before a
    convert, fetch or list run.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossword_ipuz")
