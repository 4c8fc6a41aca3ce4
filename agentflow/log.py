"""Logging setup for scripts and host applications."""
import logging
import sys
from typing import Optional

from .config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """Send agentflow logs to stderr at the configured level."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.log_format))

    logger = logging.getLogger("agentflow")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level or settings.log_level)
