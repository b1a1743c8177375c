import logging

from careerhub.core.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return a named service logger with a console handler attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            f"[{name.upper()}] %(asctime)s %(levelname)s %(message)s"
        ))
        logger.addHandler(handler)

    return logger
