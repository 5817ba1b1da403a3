import pytest

from assistant.server import create_app


@pytest.fixture
def client(host):
    app = create_app(host)
    app.config["TESTING"] = True
    return app.test_client()


def test_chat_requires_message(client):
    r = client.post("/chat", json={"message": "  "})
    assert r.status_code == 400
    assert r.get_json() == {"error": "message is required"}


def test_chat_creates_conversation(client):
    r = client.post("/chat", json={"message": "Book a service"})
    assert r.status_code == 200
    body = r.get_json()
    assert body["conversation_id"]
    assert body["reply"] == "Great! What type of service would you like to book?"
    assert body["options"] == ["Taxi", "Flight", "Hotel", "Restaurant"]
    assert body["state"] == {"step": "service_type", "slots": {}}


def test_option_click_is_treated_as_typed(client):
    cid = client.post("/chat", json={"message": "check availability"}).get_json()["conversation_id"]
    r = client.post("/chat", json={"conversation_id": cid, "option": "Hotel"})
    body = r.get_json()
    assert body["state"] == {"step": "availability_date", "slots": {"serviceType": "hotel"}}

    convo = client.get(f"/conversations/{cid}").get_json()
    assert convo["state"]["step"] == "availability_date"
    assert [m["role"] for m in convo["messages"]] == ["assistant", "user", "assistant", "user", "assistant"]
    assert convo["messages"][3]["content"] == "Hotel"


def test_get_conversation_seeds_greeting(client):
    body = client.get("/conversations/fresh").get_json()
    assert body["state"] == {"step": "greeting", "slots": {}}
    assert len(body["messages"]) == 1
    assert body["messages"][0]["options"][0] == "Book a service"


def test_theme_endpoints(client):
    assert client.get("/preferences/theme").get_json() == {"theme": "light"}
    r = client.put("/preferences/theme", json={"theme": "dark"})
    assert r.get_json() == {"theme": "dark"}
    assert client.get("/preferences/theme").get_json() == {"theme": "dark"}

    r = client.put("/preferences/theme", json={"theme": "neon"})
    assert r.status_code == 400


@pytest.mark.parametrize("body", [["book"], "book", 42, None])
def test_chat_rejects_non_object_body(client, body):
    r = client.post("/chat", json=body)
    assert r.status_code == 400
    assert r.get_json() == {"error": "message is required"}


def test_chat_coerces_non_string_fields(client):
    r = client.post("/chat", json={"option": 5, "conversation_id": 123})
    assert r.status_code == 200
    body = r.get_json()
    assert body["conversation_id"] == "123"
    assert body["state"] == {"step": "greeting", "slots": {}}

    r = client.post("/chat", json={"message": ["book"], "conversation_id": 123})
    assert r.status_code == 200


def test_theme_rejects_non_object_body(client):
    r = client.put("/preferences/theme", json=["dark"])
    assert r.status_code == 400
    assert client.get("/preferences/theme").get_json() == {"theme": "light"}
