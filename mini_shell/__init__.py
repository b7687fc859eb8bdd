"""mini-shell: an interactive command shell."""

from loguru import logger

__version__ = "0.1.0"

logger.disable("mini_shell")
