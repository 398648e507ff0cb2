import logging

from config import LOG_LEVEL


def setup_logger(name: str, level: str = LOG_LEVEL) -> logging.Logger:
    """
    Sets up a logger with a standard format. Safe to call repeatedly.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
