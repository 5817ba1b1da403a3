import logging
import threading
import time
import weakref
from typing import Optional

from assistant.config import settings
from assistant.graph.graph import build_graph
from assistant.graph.state import DialogueState
from assistant.graph.transitions import ASSISTANT_NAME
from assistant.speech import NullSpeaker, Speaker
from assistant.store import ConversationStore, InvalidPreferenceError

logger = logging.getLogger(__name__)

GREETING_OPTIONS = ["Book a service", "Check availability", "I need help", "Live agent"]
THEMES = ("light", "dark")
THEME_KEY = "theme"


class EmptyUtteranceError(ValueError):
    pass


def greeting_text() -> str:
    return f"Hello! I'm {ASSISTANT_NAME}. How can I help you today?"


class ConversationHost:
    """
    Drives the assistant for the UI: keeps the transcript and the live
    dialogue state in the store, runs one turn at a time per conversation
    and surfaces each reply after a fixed typing delay.
    """

    def __init__(
        self,
        store: ConversationStore,
        graph=None,
        typing_delay: Optional[float] = None,
        speaker: Optional[Speaker] = None,
    ):
        self.store = store
        self.graph = graph or build_graph()
        self.typing_delay = settings.typing_delay_seconds if typing_delay is None else typing_delay
        self.speaker = speaker or NullSpeaker()
        # entries go away once no turn holds the lock
        self._locks = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, conversation_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(conversation_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[conversation_id] = lock
            return lock

    # ---------------------------
    # Conversation
    # ---------------------------
    def start(self, conversation_id: str) -> list[dict]:
        with self._lock_for(conversation_id):
            self.store.ensure(conversation_id)
            transcript = self.store.transcript(conversation_id)
            if transcript:
                return transcript

            self.store.save_state(conversation_id, DialogueState.initial())
            self.store.append_message(conversation_id, "assistant", greeting_text(), options=GREETING_OPTIONS)
            return self.store.transcript(conversation_id)

    def submit(self, conversation_id: str, text: str, source: str = "text") -> dict:
        text = text or ""
        if not text.strip():
            raise EmptyUtteranceError("message is required")

        with self._lock_for(conversation_id):
            self.store.ensure(conversation_id)
            self.store.append_message(conversation_id, "user", text, meta={"source": source})

            current = self.store.load_state(conversation_id)
            out = self.graph.invoke({
                "conversation_id": conversation_id,
                "user_input": text,
                "convo_context": current.to_dict(),
            })

            # "typing..." before the reply shows up
            if self.typing_delay > 0:
                time.sleep(self.typing_delay)

            reply = out.get("reply", "") or ""
            options = out.get("options") or []
            next_state = DialogueState.from_dict(out.get("updated_context"))

            self.store.append_message(
                conversation_id,
                "assistant",
                reply,
                options=options,
                meta={"trace": out.get("trace", []), "results": out.get("results", {})},
            )
            self.store.save_state(conversation_id, next_state)
            logger.debug("conversation %s: %s -> %s", conversation_id,
                         current.to_dict()["step"], next_state.to_dict()["step"])

            self._speak(reply)

            return {
                "conversation_id": conversation_id,
                "reply": reply,
                "options": options,
                "state": next_state.to_dict(),
                "results": out.get("results", {}),
                "trace": out.get("trace", []),
            }

    def choose_option(self, conversation_id: str, option: str) -> dict:
        return self.submit(conversation_id, option, source="option")

    def _speak(self, text: str) -> None:
        try:
            self.speaker.speak(text)
        except Exception as e:
            logger.warning("speech output failed, disabling it: %s", e)
            self.speaker = NullSpeaker()

    # ---------------------------
    # Preferences
    # ---------------------------
    def theme(self) -> str:
        return self.store.get_preference(THEME_KEY, THEMES[0])

    def set_theme(self, value: str) -> str:
        if value not in THEMES:
            raise InvalidPreferenceError(THEME_KEY, value)
        self.store.set_preference(THEME_KEY, value)
        return value

    def toggle_theme(self) -> str:
        return self.set_theme("light" if self.theme() == "dark" else "dark")
