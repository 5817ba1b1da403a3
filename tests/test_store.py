import pytest

from assistant.graph.state import DialogueState, Step


def test_load_state_defaults_to_greeting(store):
    assert store.load_state("missing") == DialogueState.initial()


def test_save_and_load_state(store):
    store.ensure("conv-1")
    store.save_state("conv-1", DialogueState(Step.TAXI_TIME, {"pickupLocation": "Main St"}))
    store.save_state("conv-1", DialogueState(Step.COMPLETION, {"pickupLocation": "Main St", "pickupTime": "now"}))

    loaded = store.load_state("conv-1")
    assert loaded.step == Step.COMPLETION
    assert dict(loaded.slots) == {"pickupLocation": "Main St", "pickupTime": "now"}


def test_transcript_keeps_order_and_options(store):
    store.ensure("conv-1")
    store.append_message("conv-1", "assistant", "Hello", options=["A", "B"])
    store.append_message("conv-1", "user", "A", meta={"source": "option"})
    store.append_message("conv-1", "assistant", "Done")

    transcript = store.transcript("conv-1")
    assert [(m["role"], m["content"]) for m in transcript] == [
        ("assistant", "Hello"), ("user", "A"), ("assistant", "Done"),
    ]
    assert transcript[0]["options"] == ["A", "B"]
    assert "options" not in transcript[1]
    assert "options" not in transcript[2]


def test_append_message_rejects_unknown_role(store):
    store.ensure("conv-1")
    with pytest.raises(ValueError):
        store.append_message("conv-1", "system", "nope")


def test_preferences(store):
    assert store.get_preference("theme", "light") == "light"
    store.set_preference("theme", "dark")
    store.set_preference("theme", "light")
    assert store.get_preference("theme") == "light"
