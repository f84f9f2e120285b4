import logging

from portal.core.config import settings


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with a single stream handler attached."""
    logger = logging.getLogger(f"portal.{name}")
    logger.setLevel(settings.LOG_LEVEL.upper())

    # Avoid duplicate handlers on reload
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        logger.addHandler(handler)

    return logger
