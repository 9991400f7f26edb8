"""
Logging setup for the portal.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging`` is
called once when the application is created.
"""

import logging
import sys

from app.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Configure the root "app" logger with a single stream handler."""
    logger = logging.getLogger("app")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_portal_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._portal_handler = True
        logger.addHandler(handler)

    # httpx logs every Supabase request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger


def log_auth_event(logger: logging.Logger, event: str, success: bool, email: str = None, reason: str = None) -> None:
    level = logging.INFO if success else logging.WARNING
    logger.log(
        level,
        f"Auth {event}: {'success' if success else 'failed'}"
        + (f" - {email}" if email else "")
        + (f" - {reason}" if reason else ""),
    )
