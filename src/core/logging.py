"""
Structured logging shared by the grouping engine, exporters and API.

Every module grabs its logger through ``get_logger(__name__)`` so that all
output goes to stdout in one format, at the level set by ``LOG_LEVEL``.
"""
from __future__ import annotations

import logging
import sys

from src.core.config import get_settings

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(name: str | None) -> int:
    if not name:
        return logging.INFO
    return getattr(logging, name.upper(), logging.INFO)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Return a stdout logger; *level* overrides the configured log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(_resolve_level(level or get_settings().log_level))
    return logger
