import logging

from assistant.config import Settings
from assistant.logging_config import configure_logging


def test_settings_defaults():
    s = Settings()
    assert s.typing_delay_seconds >= 0
    assert s.database_url


def test_configure_logging_is_idempotent():
    logger = configure_logging(logging.DEBUG)
    handlers = list(logger.handlers)
    configure_logging(logging.DEBUG)
    assert logger.name == "assistant"
    assert logger.handlers == handlers
    assert len(handlers) == 1
