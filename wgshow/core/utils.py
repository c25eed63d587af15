"""Utility functions for wgshow."""
import logging
import sys
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(debug=False, log_file: Optional[str] = None):
    """Set up logging configuration. Standard output is never used.

    Raises:
        ConfigurationError: If the log file cannot be opened.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr) if debug else logging.NullHandler()]
    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path))
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file {log_path}: {e}")

    logger = logging.getLogger('wgshow')
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
