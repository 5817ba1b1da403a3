from enum import Enum
from typing import NamedTuple, Optional

from assistant.graph.state import Step


class Intent(str, Enum):
    BOOK = "book"
    AVAILABILITY = "availability"
    HELP = "help"
    TAXI = "taxi"
    FLIGHT = "flight"
    HOTEL = "hotel"
    RESTAURANT = "restaurant"
    AFFIRM = "affirm"
    STATUS = "status"
    TEXT = "text"          # free text captured verbatim into a slot
    UNKNOWN = "unknown"


ESCALATION_KEYWORDS = ("agent", "human", "live agent")

CATEGORY_INTENTS = (Intent.TAXI, Intent.FLIGHT, Intent.HOTEL, Intent.RESTAURANT)


class StepRule(NamedTuple):
    keywords: tuple  # ((Intent, (kw, ...)), ...) checked in order
    fallback: Intent = Intent.UNKNOWN
    refine: Optional[dict] = None  # matched intent -> rule that may narrow it


_CATEGORY_RULE = StepRule(
    keywords=tuple((intent, (intent.value,)) for intent in CATEGORY_INTENTS),
)

_CAPTURE_RULE = StepRule(keywords=(), fallback=Intent.TEXT)

# completion, escalated, the category prompts and anything unrecognised
DEFAULT_RULE = StepRule(
    keywords=(
        (Intent.BOOK, ("book", "service", "another")),
        (Intent.STATUS, ("check", "status")),
    ),
)

RULES: dict = {
    Step.GREETING: StepRule(
        keywords=(
            (Intent.BOOK, ("book", "service")),
            (Intent.AVAILABILITY, ("availability", "check")),
            (Intent.HELP, ("help",)),
        ),
        # "book a taxi" skips the category question
        refine={Intent.BOOK: _CATEGORY_RULE},
    ),
    Step.SERVICE_TYPE: _CATEGORY_RULE,
    Step.CHECK_AVAILABILITY: _CATEGORY_RULE,
    Step.TAXI_PICKUP: _CAPTURE_RULE,
    Step.TAXI_DESTINATION: _CAPTURE_RULE,
    Step.TAXI_TIME: _CAPTURE_RULE,
    Step.AVAILABILITY_DATE: _CAPTURE_RULE,
    Step.AVAILABILITY_CONFIRMATION: StepRule(
        keywords=((Intent.AFFIRM, ("yes", "book")),),
    ),
    Step.COMPLETION: DEFAULT_RULE,
}


def normalize(text: str) -> str:
    return (text or "").lower()


def is_escalation(text: str) -> bool:
    t = normalize(text)
    return any(kw in t for kw in ESCALATION_KEYWORDS)


def detect_intent(step, text: str) -> Intent:
    """
    First (intent, keywords) pair of the step's rule with a keyword
    contained in the text wins; declaration order, not specificity.
    A refine rule for the winner replaces it when one of its own
    keywords is also present.
    """
    return _match(RULES.get(step, DEFAULT_RULE), normalize(text))


def _match(rule: StepRule, t: str) -> Intent:
    for intent, keywords in rule.keywords:
        if any(kw in t for kw in keywords):
            narrower = (rule.refine or {}).get(intent)
            if narrower is not None:
                refined = _match(narrower, t)
                if refined != narrower.fallback:
                    return refined
            return intent
    return rule.fallback
