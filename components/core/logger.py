"""Logging setup for the service."""

import logging
import sys

from components.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    level = logging.DEBUG if settings.DEBUG else logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    # No-op when handlers are already installed (uvicorn, pytest)
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(level)

    # SQL echo stays off unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
