from assistant.graph.intent import detect_intent, is_escalation
from assistant.graph.state import DialogueState, TurnOutput
from assistant.graph.transitions import ESCALATION, dispatch_step, lookup


def respond(utterance: str, state: DialogueState) -> TurnOutput:
    """
    One turn of the scripted assistant:
    - escalation keywords win on every step
    - otherwise the step's keyword rule picks an intent and the
      (step, intent) row of the transition table produces the reply
    Never raises; unmatched input gets a clarifying prompt.
    """
    utterance = utterance if isinstance(utterance, str) else ""
    state = state if isinstance(state, DialogueState) else DialogueState.from_dict(state)

    if is_escalation(utterance):
        return _escalate(state)

    step = dispatch_step(state.step)
    intent = detect_intent(step, utterance)
    return lookup(step, intent).apply(utterance, state, intent)


def _escalate(state: DialogueState) -> TurnOutput:
    return TurnOutput(
        message=ESCALATION.message,
        options=ESCALATION.options,
        next_state=DialogueState(ESCALATION.next_step, state.slots),
    )
