from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, TypedDict


class Step(str, Enum):
    GREETING = "greeting"
    SERVICE_TYPE = "service_type"
    TAXI_PICKUP = "taxi_pickup"
    TAXI_DESTINATION = "taxi_destination"
    TAXI_TIME = "taxi_time"
    FLIGHT_DETAILS = "flight_details"
    HOTEL_CITY = "hotel_city"
    RESTAURANT_CUISINE = "restaurant_cuisine"
    CHECK_AVAILABILITY = "check_availability"
    AVAILABILITY_DATE = "availability_date"
    AVAILABILITY_CONFIRMATION = "availability_confirmation"
    COMPLETION = "completion"
    ESCALATED = "escalated"

    @classmethod
    def coerce(cls, value: Any):
        """
        Step for a known tag, otherwise the raw string so the engine
        can route it through the default branch.
        """
        try:
            return cls(value)
        except ValueError:
            return str(value)


@dataclass(frozen=True)
class DialogueState:
    step: Step = Step.GREETING
    slots: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "step", Step.coerce(self.step))
        object.__setattr__(self, "slots", MappingProxyType(dict(self.slots or {})))

    def __hash__(self):
        return hash((self.step, frozenset(self.slots.items())))

    @classmethod
    def initial(cls) -> "DialogueState":
        return cls(Step.GREETING, {})

    def to_dict(self) -> dict:
        step = self.step.value if isinstance(self.step, Step) else self.step
        return {"step": step, "slots": dict(self.slots)}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DialogueState":
        data = data or {}
        step = data.get("step") or Step.GREETING
        slots = data.get("slots") or {}
        return cls(step, {str(k): "" if v is None else str(v) for k, v in slots.items()})


@dataclass(frozen=True)
class TurnOutput:
    message: str
    options: tuple = ()
    next_state: DialogueState = field(default_factory=DialogueState.initial)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "options": list(self.options),
            "nextState": self.next_state.to_dict(),
        }


class TurnState(TypedDict, total=False):
    conversation_id: str
    user_input: str

    # dialogue state loaded from DB (Conversation.context)
    convo_context: dict[str, Any]

    # outputs
    reply: str
    options: list[str]
    results: dict[str, Any]
    trace: list[dict]

    # dialogue state to write back to DB
    updated_context: dict[str, Any]
