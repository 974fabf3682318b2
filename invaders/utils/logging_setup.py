"""
Logging setup for Invaders.
"""

import logging
from pathlib import Path

from .config_loader import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(config: LoggingConfig) -> None:
    """
    Configure the root logger from a LoggingConfig.

    Logs go to stderr, and to config.log_file as well when one is set.
    """
    handlers = [logging.StreamHandler()]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
