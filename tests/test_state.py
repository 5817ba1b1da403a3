from assistant.graph.state import DialogueState, Step, TurnOutput


def test_initial_state():
    s = DialogueState.initial()
    assert s.step == Step.GREETING
    assert dict(s.slots) == {}


def test_from_dict_tolerates_missing_and_bad_values():
    assert DialogueState.from_dict(None) == DialogueState.initial()
    assert DialogueState.from_dict({}) == DialogueState.initial()

    s = DialogueState.from_dict({"step": "warp_drive", "slots": {"n": 3, "x": None}})
    assert s.step == "warp_drive"
    assert dict(s.slots) == {"n": "3", "x": ""}


def test_to_dict_round_trips_known_step():
    s = DialogueState("taxi_time", {"pickupLocation": "Main St"})
    assert s.step is Step.TAXI_TIME
    assert DialogueState.from_dict(s.to_dict()) == s
    assert s.to_dict() == {"step": "taxi_time", "slots": {"pickupLocation": "Main St"}}


def test_slots_are_copied_on_construction():
    raw = {"serviceType": "taxi"}
    s = DialogueState(Step.TAXI_PICKUP, raw)
    raw["serviceType"] = "hotel"
    assert s.slots["serviceType"] == "taxi"


def test_turn_output_wire_shape():
    out = TurnOutput("hi", ("A", "B"), DialogueState(Step.COMPLETION, {"k": "v"}))
    assert out.to_dict() == {
        "message": "hi",
        "options": ["A", "B"],
        "nextState": {"step": "completion", "slots": {"k": "v"}},
    }


def test_states_are_hashable_by_value():
    a = DialogueState(Step.TAXI_TIME, {"pickupLocation": "Main St", "destination": "Airport"})
    b = DialogueState("taxi_time", {"destination": "Airport", "pickupLocation": "Main St"})
    assert hash(a) == hash(b)
    assert len({a, b, DialogueState.initial()}) == 2
