"""Logging setup shared by all gringotts modules."""

from __future__ import annotations

import logging
import os

ROOT_LOGGER_NAME = 'gringotts'
LOG_LEVEL_ENV = 'GRINGOTTS_LOG_LEVEL'
DEFAULT_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV, 'INFO').strip().upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the `gringotts` root, configuring the root once."""
    _configure_root()
    if name == ROOT_LOGGER_NAME or name.startswith(f'{ROOT_LOGGER_NAME}.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
