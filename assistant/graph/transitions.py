from dataclasses import dataclass
from typing import Mapping, Optional

from assistant.graph.intent import Intent, RULES
from assistant.graph.state import DialogueState, Step, TurnOutput

SERVICE_OPTIONS = ("Taxi", "Flight", "Hotel", "Restaurant")
MENU_OPTIONS = ("Book a service", "Check availability", "Live agent")

ESCALATION_MESSAGE = (
    "I'll connect you with a live agent. Please wait a moment while I transfer your chat."
)

SERVICE_SLOT = "serviceType"

ASSISTANT_NAME = "Abdullah Assistant"


class _TemplateValues(dict):
    def __missing__(self, key):
        return ""


@dataclass(frozen=True)
class Transition:
    next_step: Step
    message: str
    options: tuple = ()
    store: Optional[str] = None   # slot written this turn
    reset: bool = False           # drop collected slots first

    def apply(self, utterance: str, state: DialogueState, intent: Intent) -> TurnOutput:
        slots = {} if self.reset else dict(state.slots)
        if self.store == SERVICE_SLOT:
            slots[self.store] = intent.value
        elif self.store:
            slots[self.store] = utterance

        # templates only ever see the incoming slots
        values = _TemplateValues(state.slots)
        values["input"] = utterance
        values["category"] = intent.value
        message = self.message.format_map(values)

        return TurnOutput(
            message=message,
            options=self.options,
            next_state=DialogueState(self.next_step, slots),
        )


ESCALATION = Transition(Step.ESCALATED, ESCALATION_MESSAGE)

_PICK_SERVICE = Transition(
    Step.SERVICE_TYPE,
    "I'm not sure which service you'd like to book. Could you choose one of the following?",
    SERVICE_OPTIONS,
)

_PICK_AVAILABILITY = Transition(
    Step.CHECK_AVAILABILITY,
    "Which service would you like to check availability for?",
    SERVICE_OPTIONS,
)

_CHECK_AVAILABILITY_FOR = Transition(
    Step.AVAILABILITY_DATE,
    "I'm checking availability for {category} services. When would you need this service?",
    ("Today", "Tomorrow", "This weekend", "Next week", "Specific date"),
    store=SERVICE_SLOT,
)

_BOOK_TAXI = Transition(
    Step.TAXI_PICKUP,
    "Where would you like to be picked up?",
    store=SERVICE_SLOT,
)

_BOOK_FLIGHT = Transition(
    Step.FLIGHT_DETAILS,
    "Please provide your departure city and destination city.",
    store=SERVICE_SLOT,
)

_BOOK_HOTEL = Transition(
    Step.HOTEL_CITY,
    "What city will you be staying in?",
    store=SERVICE_SLOT,
)

_BOOK_RESTAURANT = Transition(
    Step.RESTAURANT_CUISINE,
    "What type of cuisine are you interested in?",
    ("Italian", "Japanese", "Mexican", "Indian", "American"),
    store=SERVICE_SLOT,
)

TRANSITIONS: Mapping = {
    # greeting
    (Step.GREETING, Intent.BOOK): Transition(
        Step.SERVICE_TYPE,
        "Great! What type of service would you like to book?",
        SERVICE_OPTIONS,
    ),
    (Step.GREETING, Intent.AVAILABILITY): Transition(
        Step.CHECK_AVAILABILITY,
        "I can help you check availability. What service are you interested in?",
        SERVICE_OPTIONS,
    ),
    (Step.GREETING, Intent.HELP): Transition(
        Step.GREETING,
        "I'm here to help! I can assist with booking services, checking availability, "
        "or connecting you with a live agent. What would you like help with?",
        MENU_OPTIONS,
        reset=True,
    ),
    (Step.GREETING, Intent.UNKNOWN): Transition(
        Step.GREETING,
        "I can help you book services, check availability, or connect you with a live agent. "
        "What would you like to do?",
        MENU_OPTIONS,
        reset=True,
    ),

    # greeting, booking keyword plus a category
    (Step.GREETING, Intent.TAXI): _BOOK_TAXI,
    (Step.GREETING, Intent.FLIGHT): _BOOK_FLIGHT,
    (Step.GREETING, Intent.HOTEL): _BOOK_HOTEL,
    (Step.GREETING, Intent.RESTAURANT): _BOOK_RESTAURANT,

    # service_type
    (Step.SERVICE_TYPE, Intent.TAXI): _BOOK_TAXI,
    (Step.SERVICE_TYPE, Intent.FLIGHT): _BOOK_FLIGHT,
    (Step.SERVICE_TYPE, Intent.HOTEL): _BOOK_HOTEL,
    (Step.SERVICE_TYPE, Intent.RESTAURANT): _BOOK_RESTAURANT,
    (Step.SERVICE_TYPE, Intent.UNKNOWN): _PICK_SERVICE,

    # taxi sub-flow
    (Step.TAXI_PICKUP, Intent.TEXT): Transition(
        Step.TAXI_DESTINATION,
        'Great, I\'ve noted your pickup location: "{input}". What\'s your destination?',
        store="pickupLocation",
    ),
    (Step.TAXI_DESTINATION, Intent.TEXT): Transition(
        Step.TAXI_TIME,
        "Thanks! When would you like to be picked up?",
        ("Now", "In 30 minutes", "In 1 hour", "Tomorrow", "Specific time"),
        store="destination",
    ),
    (Step.TAXI_TIME, Intent.TEXT): Transition(
        Step.COMPLETION,
        "Perfect! I've booked a taxi from {pickupLocation} to {destination} for {input}. "
        "Your driver will arrive on time. Is there anything else you'd like help with?",
        ("Book another service", "Check status", "No, thank you"),
        store="pickupTime",
    ),

    # availability
    (Step.CHECK_AVAILABILITY, Intent.TAXI): _CHECK_AVAILABILITY_FOR,
    (Step.CHECK_AVAILABILITY, Intent.FLIGHT): _CHECK_AVAILABILITY_FOR,
    (Step.CHECK_AVAILABILITY, Intent.HOTEL): _CHECK_AVAILABILITY_FOR,
    (Step.CHECK_AVAILABILITY, Intent.RESTAURANT): _CHECK_AVAILABILITY_FOR,
    (Step.CHECK_AVAILABILITY, Intent.UNKNOWN): _PICK_AVAILABILITY,
    (Step.AVAILABILITY_DATE, Intent.TEXT): Transition(
        Step.AVAILABILITY_CONFIRMATION,
        "Great! I can confirm that {serviceType} services are available for {input}. "
        "Would you like to proceed with booking?",
        ("Yes, book now", "No, thank you"),
        store="date",
    ),
    (Step.AVAILABILITY_CONFIRMATION, Intent.AFFIRM): Transition(
        Step.SERVICE_TYPE,
        "Excellent! Let's proceed with your booking.",
        ("Continue",),
    ),
    (Step.AVAILABILITY_CONFIRMATION, Intent.UNKNOWN): Transition(
        Step.GREETING,
        "No problem! Is there anything else I can help you with?",
        ("Book a service", "Check other availability", "No, thank you"),
        reset=True,
    ),

    # completion / escalated / category prompts / unknown steps
    (Step.COMPLETION, Intent.BOOK): Transition(
        Step.SERVICE_TYPE,
        "What type of service would you like to book?",
        SERVICE_OPTIONS,
        reset=True,
    ),
    (Step.COMPLETION, Intent.STATUS): Transition(
        Step.COMPLETION,
        "Your booking is confirmed and everything is on schedule. "
        "Is there anything else you'd like to know?",
        ("Book another service", "No, thank you"),
    ),
    (Step.COMPLETION, Intent.UNKNOWN): Transition(
        Step.GREETING,
        f"Thank you for using {ASSISTANT_NAME}! "
        "Feel free to reach out if you need any assistance in the future.",
        ("Book a service", "Check availability"),
        reset=True,
    ),
}


def dispatch_step(step):
    """Row family for a step; steps without rows of their own share completion's."""
    return step if step in RULES else Step.COMPLETION


def lookup(step, intent: Intent) -> Transition:
    return TRANSITIONS[(dispatch_step(step), intent)]
