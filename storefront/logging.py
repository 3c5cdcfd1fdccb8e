"""
Logging setup for the storefront cart.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart loaded")
    logger.error("Failed to persist cart", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from LOG_LEVEL, default INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach a stdout handler unless the host application already configured logging."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # Every add/update does a stock lookup; request lines are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger, typically get_logger(__name__)."""
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value) -> str:
    """
    Render a product id for a log line.

    Ids are kept whole so failures can be traced to the exact product.
    Line breaks and control characters are escaped so a crafted id
    cannot forge extra log entries.
    """
    if id_value is None or id_value == "":
        return "N/A"
    return (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


__all__ = [
    "LOG_FORMAT",
    "get_logger",
    "sanitize_id_for_logging",
]
