"""
Logging configuration
"""
import logging
import sys
from typing import Optional, Union

from kitchen_ops.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TaggedLogger(logging.LoggerAdapter):
    """Prefixes every message with a short subsystem tag, e.g. "[HACCP]"."""

    def process(self, msg, kwargs):
        return f"[{self.extra['tag']}] {msg}", kwargs


def get_logger(
    name: str,
    tag: Optional[str] = None,
) -> Union[logging.Logger, TaggedLogger]:
    """Get a configured logger instance, optionally tagged"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    if tag:
        return TaggedLogger(logger, {"tag": tag})
    return logger
