"""Logging setup for the API process."""

import logging

from clubhub.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for the whole process.

    Args:
        level: Log level name, e.g. "INFO" or "DEBUG".
    """
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # SQLAlchemy echoes every statement at INFO when its logger inherits it
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
