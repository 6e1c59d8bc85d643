# aquagate/components/conversation_classifier.py
"""
Keyword classifier that maps a transcript to a conversation type.

Rules are tried in the fixed order of CLASSIFICATION_RULES (pool, spa,
aquarium). A rule needs an intent keyword plus confirmation, either from the
declared water type or from an explicit mention of the water body. The first
confirming rule wins; anything else is 'general'.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

from aquagate.common.logger import get_logger
from aquagate.common.models import AQUARIUM_WATER_TYPES, ConversationType, Message, WaterType
from aquagate.common.validation import user_contents
from aquagate.config.config import CLASSIFIER_RECENT_USER_MESSAGES

logger = get_logger(__name__)

# Keywords that indicate dosing/treatment intent
POOL_DOSING_KEYWORDS = (
    "add chlorine", "shock", "balance", "dose", "how much", "dosage",
    "raise ph", "lower ph", "add muriatic", "add acid", "add soda ash",
    "add stabilizer", "add cya", "chlorinate", "add salt", "super chlorinate",
    "algaecide", "clarifier", "how many pounds", "how many ounces", "how many gallons",
)

SPA_DOSING_KEYWORDS = (
    "add bromine", "add chlorine", "shock spa", "shock hot tub", "balance spa",
    "spa chemicals", "hot tub dose", "spa dose", "sanitize spa", "sanitize hot tub",
)

AQUARIUM_TREATMENT_KEYWORDS = (
    "medication", "treat", "sick fish", "disease", "ich treatment", "fin rot",
    "fungus", "parasite", "quarantine", "medicate", "salt dip", "salt treatment",
    "kanaplex", "metroplex", "general cure", "ich-x", "erythromycin", "prazipro",
    "melafix", "pimafix", "maracyn", "api treatment", "seachem treatment",
    "dying fish", "fish dying", "white spots", "red streaks", "bloated", "dropsy",
)


@dataclass(frozen=True)
class ClassificationRule:
    conversation_type: ConversationType
    intent_keywords: Tuple[str, ...]
    water_types: FrozenSet[WaterType]
    confirmation_keywords: Tuple[str, ...]

    def has_intent(self, text: str) -> bool:
        return any(kw in text for kw in self.intent_keywords)

    def is_confirmed(self, text: str, declared_water_type: Optional[WaterType]) -> bool:
        if declared_water_type is not None and declared_water_type in self.water_types:
            return True
        return any(kw in text for kw in self.confirmation_keywords)

    def matches(self, text: str, declared_water_type: Optional[WaterType]) -> bool:
        return self.has_intent(text) and self.is_confirmed(text, declared_water_type)


# Order matters: a message can hit several rules' raw keywords
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        ConversationType.POOL_DOSING,
        POOL_DOSING_KEYWORDS,
        frozenset({WaterType.POOL}),
        ("pool",),
    ),
    ClassificationRule(
        ConversationType.SPA_DOSING,
        SPA_DOSING_KEYWORDS,
        frozenset({WaterType.SPA}),
        ("spa", "hot tub"),
    ),
    ClassificationRule(
        ConversationType.AQUARIUM_TREATMENT,
        AQUARIUM_TREATMENT_KEYWORDS,
        AQUARIUM_WATER_TYPES,
        ("fish", "tank"),
    ),
)


def recent_user_text(messages: Sequence[Message], count: int = CLASSIFIER_RECENT_USER_MESSAGES) -> str:
    return " ".join(user_contents(messages, last=count))


def classify_conversation(
    messages: Sequence[Message],
    declared_water_type: Optional[WaterType] = None,
    rules: Tuple[ClassificationRule, ...] = CLASSIFICATION_RULES,
) -> ConversationType:
    text = recent_user_text(messages)
    if not text.strip():
        return ConversationType.GENERAL

    for rule in rules:
        if rule.matches(text, declared_water_type):
            logger.debug(f"Classified turn as {rule.conversation_type.value}")
            return rule.conversation_type

    return ConversationType.GENERAL
