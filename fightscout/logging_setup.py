"""
Loguru sink configuration for the CLI and embedding applications.
"""

import sys
from typing import Optional

from loguru import logger

from fightscout.config import LoggingConfig, get_config


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Replace loguru's default sink with one driven by LoggingConfig."""
    cfg = config or get_config().logging
    logger.remove()
    if cfg.serialize:
        logger.add(sys.stderr, level=cfg.level, serialize=True)
    else:
        logger.add(sys.stderr, level=cfg.level, format=cfg.format)
    logger.debug(f"Logging configured at level {cfg.level}")
