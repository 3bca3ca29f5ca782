"""
Logging configuration

One stdout handler for the whole process. Request lines are written by
api.middleware.RequestContextMiddleware, so the server's own access log
is silenced to avoid duplicates.
"""

import logging
import sys
from typing import Optional
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO for an import service
_QUIET_LOGGERS = ("sqlalchemy.pool", "multipart", "uvicorn.access")


def setup_logging(level: Optional[str] = None) -> int:
    """Configure the root logger and return the effective level"""
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # SQL echo follows ENVIRONMENT; otherwise keep statements out of the log
    if settings.ENVIRONMENT != "development":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging configured at {logging.getLevelName(log_level)} level")
    return log_level
