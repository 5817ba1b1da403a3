import logging
from typing import Any, Optional

from sqlalchemy import select

from assistant.graph.state import DialogueState
from assistant.models import Conversation, Message, Preference

logger = logging.getLogger(__name__)

ROLES = ("user", "assistant")


class InvalidPreferenceError(ValueError):
    def __init__(self, key: str, value: Any):
        super().__init__(f"Invalid value for {key}: {value!r}")
        self.key = key
        self.value = value


class ConversationStore:
    """
    Load/save access to everything the host persists between sessions:
    the live dialogue state, the transcript and UI preferences.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def ensure(self, conversation_id: str) -> None:
        db = self.session_factory()
        try:
            if db.get(Conversation, conversation_id) is None:
                db.add(Conversation(id=conversation_id, context=DialogueState.initial().to_dict()))
                db.commit()
                logger.info("created conversation %s", conversation_id)
        finally:
            db.close()

    def load_state(self, conversation_id: str) -> DialogueState:
        db = self.session_factory()
        try:
            conv = db.get(Conversation, conversation_id)
            if conv is None:
                return DialogueState.initial()
            return DialogueState.from_dict(conv.context)
        finally:
            db.close()

    def save_state(self, conversation_id: str, state: DialogueState) -> None:
        db = self.session_factory()
        try:
            conv = db.get(Conversation, conversation_id)
            if conv is None:
                conv = Conversation(id=conversation_id)
            # assign a fresh dict so the JSON column is flagged dirty
            conv.context = state.to_dict()
            db.add(conv)
            db.commit()
        finally:
            db.close()

    def append_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        options: Optional[list] = None,
        meta: Optional[dict] = None,
    ) -> int:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        meta = dict(meta or {})
        if options:
            meta["options"] = list(options)

        db = self.session_factory()
        try:
            msg = Message(conversation_id=conversation_id, role=role, content=content, meta=meta)
            db.add(msg)
            db.commit()
            return msg.id
        finally:
            db.close()

    def transcript(self, conversation_id: str) -> list[dict]:
        db = self.session_factory()
        try:
            rows = db.scalars(
                select(Message)
                .where(Message.conversation_id == conversation_id)
                .order_by(Message.id)
            ).all()
            out = []
            for m in rows:
                item = {"id": m.id, "role": m.role, "content": m.content}
                if m.role == "assistant" and (m.meta or {}).get("options"):
                    item["options"] = list(m.meta["options"])
                out.append(item)
            return out
        finally:
            db.close()

    def get_preference(self, key: str, default: Optional[str] = None) -> Optional[str]:
        db = self.session_factory()
        try:
            pref = db.get(Preference, key)
            return pref.value if pref else default
        finally:
            db.close()

    def set_preference(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            pref = db.get(Preference, key)
            if pref is None:
                pref = Preference(key=key, value=value)
            else:
                pref.value = value
            db.add(pref)
            db.commit()
        finally:
            db.close()
