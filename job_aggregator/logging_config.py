import logging

from .config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()


def configure_logging(level: str = LOG_LEVEL):
    """Configure basic logging for the aggregator.

    Uses a simple format including time, level, logger name and message. Safe to
    call more than once: existing handlers (uvicorn, pytest) are left alone.
    """
    if logging.getLogger().handlers:
        # Already configured (avoid duplicate handlers in reload / dev)
        return
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    logging.basicConfig(level=level, format=fmt)


def get_logger(name: str):
    configure_logging()
    return logging.getLogger(name)
