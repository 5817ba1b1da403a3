import logging

from assistant.config import settings


def configure_logging(level=None):
    level = level or getattr(logging, settings.log_level.upper(), logging.INFO)
    logger = logging.getLogger("assistant")
    logger.setLevel(level)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        ch.setFormatter(fmt)
        logger.addHandler(ch)
    return logger
