import logging

from langgraph.graph import StateGraph, END

from assistant.graph.engine import respond
from assistant.graph.state import DialogueState, Step, TurnState

logger = logging.getLogger(__name__)


# ---------------------------
# Utilities
# ---------------------------
def add_trace(state: TurnState, node: str, detail: dict):
    state.setdefault("trace", [])
    state["trace"].append({"node": node, "detail": detail})


# ---------------------------
# Engine Node
# ---------------------------
def node_engine(state: TurnState) -> TurnState:
    user_text = state.get("user_input") or ""
    current = DialogueState.from_dict(state.get("convo_context"))

    out = respond(user_text, current)

    state["reply"] = out.message
    state["options"] = list(out.options)
    state["updated_context"] = out.next_state.to_dict()
    add_trace(state, "engine", {
        "from": current.to_dict()["step"],
        "to": out.next_state.to_dict()["step"],
    })
    return state


def node_route(state: TurnState) -> str:
    before = (state.get("convo_context") or {}).get("step")
    after = (state.get("updated_context") or {}).get("step")
    if after == Step.ESCALATED.value and before != Step.ESCALATED.value:
        return "handoff"
    return "done"


# ---------------------------
# Hand-off Node
# ---------------------------
def node_handoff(state: TurnState) -> TurnState:
    slots = (state.get("updated_context") or {}).get("slots") or {}
    handoff = {
        "conversation_id": state.get("conversation_id"),
        "slots": dict(slots),
    }
    state.setdefault("results", {})
    state["results"]["handoff"] = handoff
    add_trace(state, "handoff", handoff)
    logger.info("conversation %s handed off to a live agent", state.get("conversation_id"))
    return state


# ---------------------------
# Build graph
# ---------------------------
def build_graph():
    g = StateGraph(TurnState)

    g.add_node("engine", node_engine)
    g.add_node("handoff", node_handoff)

    g.set_entry_point("engine")

    g.add_conditional_edges("engine", node_route, {
        "handoff": "handoff",
        "done": END,
    })

    g.add_edge("handoff", END)

    return g.compile()
