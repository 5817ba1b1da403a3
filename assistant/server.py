from flask import Flask, request, jsonify
from dotenv import load_dotenv
import uuid

from assistant import init_db
from assistant.config import settings
from assistant.db import SessionLocal
from assistant.host import ConversationHost, EmptyUtteranceError
from assistant.logging_config import configure_logging
from assistant.speech import LoggingSpeaker, NullSpeaker
from assistant.store import ConversationStore, InvalidPreferenceError

load_dotenv()


def create_app(host: ConversationHost = None) -> Flask:
    app = Flask(__name__)
    if host is None:
        speaker = LoggingSpeaker() if settings.speech_enabled else NullSpeaker()
        host = ConversationHost(ConversationStore(SessionLocal), speaker=speaker)
    app.config["HOST"] = host

    @app.post("/chat")
    def chat():
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            body = {}
        option = str(body.get("option") or "").strip()
        message = option or str(body.get("message") or "")
        if not message.strip():
            return jsonify({"error": "message is required"}), 400

        conversation_id = str(body.get("conversation_id") or "").strip() or uuid.uuid4().hex

        host.start(conversation_id)
        try:
            if option:
                out = host.choose_option(conversation_id, option)
            else:
                out = host.submit(conversation_id, message, source=str(body.get("source") or "text"))
        except EmptyUtteranceError:
            return jsonify({"error": "message is required"}), 400

        return jsonify(out)

    @app.get("/conversations/<conversation_id>")
    def conversation(conversation_id):
        transcript = host.start(conversation_id)
        state = host.store.load_state(conversation_id)
        return jsonify({
            "conversation_id": conversation_id,
            "messages": transcript,
            "state": state.to_dict(),
        })

    @app.get("/preferences/theme")
    def get_theme():
        return jsonify({"theme": host.theme()})

    @app.put("/preferences/theme")
    def put_theme():
        body = request.get_json(force=True, silent=True)
        if not isinstance(body, dict):
            body = {}
        try:
            theme = host.set_theme(body.get("theme"))
        except InvalidPreferenceError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"theme": theme})

    return app


if __name__ == "__main__":
    configure_logging()
    # Create tables (simple dev mode)
    init_db()
    create_app().run(host=settings.host, port=settings.port, debug=True)
