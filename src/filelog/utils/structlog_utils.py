"""Utility for setting up structlog diagnostics and gin configuration.

filelog reports its own lifecycle (open, failed open, failed write, close)
through structlog. These helpers wire structlog to the standard library
``logging`` module and load gin config files.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import gin
import structlog
from structlog.stdlib import LoggerFactory

logger = structlog.get_logger()


def setup_structlog(level: int = logging.INFO, filename: Optional[str] = None) -> None:
    """Route structlog events through stdlib logging as JSON lines.

    Args:
        level (int, optional): Minimum stdlib logging level. Defaults to logging.INFO.
        filename (Optional[str], optional): File for the diagnostics. Defaults to stderr.
    """
    logging.basicConfig(format="%(message)s", level=level, filename=filename)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def load_config(config_file: Union[str, Path]) -> None:
    """Parse a gin config file, binding writer defaults.

    Args:
        config_file (Union[str, Path]): Path to the ``.gin`` file.
    """
    gin.parse_config_file(str(config_file))
    logger.info("config_loaded", config_file=str(config_file))
