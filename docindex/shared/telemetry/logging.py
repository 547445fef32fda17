"""Process-wide logging setup."""

import logging
import sys

from docindex.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Request logs from these include the full inference URL (API key in the query).
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging() -> None:
    """Send records to stdout at DEBUG (settings.debug) or INFO."""
    level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
