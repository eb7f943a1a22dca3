# salonbook/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from typing import Optional

from salonbook.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers kept at WARNING unless running in DEBUG
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
    "redis",
    "uvicorn.access",
)


def setup_logging(level: Optional[str] = None):
    """Configure root logging to stdout; level defaults to LOG_LEVEL from settings"""
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not settings.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # Admission decisions are always worth keeping
    logging.getLogger("salonbook.services.booking").setLevel(logging.INFO)
