"""Logging setup for mini-shell.

Logging is disabled for the mini_shell namespace unless a level is
configured, so diagnostics never mix with interactive output.
"""

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stderr sink at ``level``, or silence the package."""
    logger.remove()
    if not level:
        logger.disable("mini_shell")
        return

    logger.add(
        sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.enable("mini_shell")
