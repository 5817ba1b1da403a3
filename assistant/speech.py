import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Speaker(ABC):
    """Text-to-speech output channel for assistant replies."""

    @abstractmethod
    def speak(self, text: str) -> None:
        ...


class NullSpeaker(Speaker):
    def speak(self, text: str) -> None:
        return None


class LoggingSpeaker(Speaker):
    def speak(self, text: str) -> None:
        logger.info("speak: %s", text)
