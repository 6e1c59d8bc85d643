# aquagate/components/scope_classifier.py
"""
Aquatics-only scope check.
Runs before the input gate. Short follow-ups ("thanks", "ok", "yes") stay in
scope once the user is already talking about aquatics; anything else without a
domain keyword is redirected.
"""
import re
from typing import Sequence, Tuple

from aquagate.common.logger import get_logger
from aquagate.common.models import ScopeDecision
from aquagate.common.validation import MessageLike, coerce_transcript
from aquagate.config.config import SCOPE_RECENT_WINDOW, SCOPE_SHORT_MESSAGE_MAX_TOKENS

logger = get_logger(__name__)

AQUATIC_DOMAIN_KEYWORDS = (
    "aquatic", "aquarium", "tank", "fish", "reef", "coral", "freshwater", "saltwater", "brackish",
    "pond", "koi", "goldfish", "ammonia", "nitrite", "nitrate", "ph", "alkalinity", "kh", "gh",
    "salinity", "specific gravity", "sg", "filter", "skimmer", "heater", "co2", "dosing",
    "chlorine", "bromine", "cyanuric", "cya", "pool", "spa", "hot tub", "pump",
)

# (meaning, pattern) - matched against the trimmed, lowercased last user message
SOFT_INTERACTION_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("greeting", re.compile(r"^(hi|hello|hey|yo|sup|what'?s up)[!.?\s]*$", re.IGNORECASE)),
    ("acknowledgement", re.compile(r"^(thanks|thank you|thx|ok|okay|got it|sounds good|cool|nice)[!.?\s]*$", re.IGNORECASE)),
    ("confirmation", re.compile(r"^(yes|yeah|yep|no|nope|sure|go ahead|continue|more|retry|again)[!.?\s]*$", re.IGNORECASE)),
    ("help", re.compile(r"^(help|assist me|can you help)[!.?\s]*$", re.IGNORECASE)),
)

OFF_TOPIC_REASON = "off_topic"
REDIRECT_MESSAGE = (
    "I can only help with aquatics topics: aquariums, pools, spas, and ponds. "
    "Ask me about water chemistry, livestock health, equipment, maintenance, or dosing."
)


def has_aquatic_keyword(text: str) -> bool:
    normalized = text.lower()
    return any(keyword in normalized for keyword in AQUATIC_DOMAIN_KEYWORDS)


def is_soft_interaction(text: str) -> bool:
    return any(pattern.match(text) for _, pattern in SOFT_INTERACTION_PATTERNS)


def evaluate_scope(messages: Sequence[MessageLike]) -> ScopeDecision:
    """
    Decide whether the assistant should engage this turn at all.
    If in_scope is False, the caller returns redirect_message and skips the gate and the model.
    """
    transcript = coerce_transcript(messages)
    user_messages = [m for m in transcript if m.is_user]

    if not user_messages:
        return ScopeDecision(in_scope=True)

    last = user_messages[-1]
    # Attachments are assumed to be photos of the tank/pool or a test strip
    if last.has_attachment:
        return ScopeDecision(in_scope=True)

    last_text = last.content.strip().lower()
    if not last_text:
        return ScopeDecision(in_scope=True)

    if has_aquatic_keyword(last_text):
        return ScopeDecision(in_scope=True)

    window = user_messages[-SCOPE_RECENT_WINDOW:] if SCOPE_RECENT_WINDOW > 0 else []
    recent_user_text = " ".join(m.content.lower() for m in window)
    is_short = len(last_text.split()) <= SCOPE_SHORT_MESSAGE_MAX_TOKENS

    # Keep normal back-and-forth flowing once the user is already in aquatics context
    if has_aquatic_keyword(recent_user_text) and (is_soft_interaction(last_text) or is_short):
        return ScopeDecision(in_scope=True)

    logger.info("Scope check: last user message is off topic, redirecting")
    return ScopeDecision(in_scope=False, reason=OFF_TOPIC_REASON, redirect_message=REDIRECT_MESSAGE)
