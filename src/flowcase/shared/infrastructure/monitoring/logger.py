"""
Logging setup for flowcase.

Every module logs through ``get_logger(__name__)``, so all records land
under the ``flowcase`` logger. Handlers are attached to that logger only;
applications embedding flowcase keep control of the root logger. Console
records go to stderr, leaving stdout to command output.
"""

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from ...config.settings import get_settings

PACKAGE_LOGGER = "flowcase"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    return handlers


@lru_cache()
def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    include_timestamp: bool = True
) -> logging.Logger:
    """
    Configure the ``flowcase`` logger once per argument combination.

    Args:
        log_level: Level name; defaults to the ``log_level`` setting
        log_file: Extra file destination; defaults to the ``log_file`` setting
        include_timestamp: Prefix records with the time

    Returns:
        The configured package logger
    """
    config = get_settings().logging_config
    level_name = (log_level or config['level']).upper()
    log_file = log_file or config['file']

    pattern = config['format'] if include_timestamp else '%(name)s - %(levelname)s - %(message)s'
    formatter = logging.Formatter(pattern, datefmt=DATE_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    return package_logger


@lru_cache()
def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, configuring the package logger on first use."""
    setup_logging()
    return logging.getLogger(name)
