import pytest

from aquagate.common.models import ConversationType, Message, WaterType
from aquagate.components.conversation_classifier import CLASSIFICATION_RULES, classify_conversation


def user(text):
    return Message(role="user", content=text)


def assistant(text):
    return Message(role="assistant", content=text)


# --- Test Data ---
test_cases = [
    ("How much chlorine should I add to my pool?", None, ConversationType.POOL_DOSING),
    ("How much chlorine should I add?", WaterType.POOL, ConversationType.POOL_DOSING),
    ("How do I shock hot tub water?", None, ConversationType.SPA_DOSING),
    ("I need to add bromine", WaterType.SPA, ConversationType.SPA_DOSING),
    ("My fish has ich, what medication should I use?", WaterType.FRESHWATER, ConversationType.AQUARIUM_TREATMENT),
    ("My fish has fin rot", None, ConversationType.AQUARIUM_TREATMENT),
    ("My clownfish is sick, should I treat it?", WaterType.SALTWATER, ConversationType.AQUARIUM_TREATMENT),
    ("What temperature should I keep my tank at?", WaterType.FRESHWATER, ConversationType.GENERAL),
    ("I need to shock my water", WaterType.POOL, ConversationType.POOL_DOSING),
    ("I need to shock my water", WaterType.FRESHWATER, ConversationType.GENERAL),
    ("What fish are compatible with bettas?", WaterType.FRESHWATER, ConversationType.GENERAL),
]


@pytest.mark.parametrize("text, water_type, expected", test_cases)
def test_classify_conversation(text, water_type, expected):
    assert classify_conversation([user(text)], water_type) == expected


def test_rule_order_is_pool_spa_aquarium():
    assert [r.conversation_type for r in CLASSIFICATION_RULES] == [
        ConversationType.POOL_DOSING,
        ConversationType.SPA_DOSING,
        ConversationType.AQUARIUM_TREATMENT,
    ]


def test_pool_wins_when_several_rules_match():
    text = "add chlorine to the pool and the hot tub"
    assert CLASSIFICATION_RULES[0].matches(text, None)
    assert CLASSIFICATION_RULES[1].matches(text, None)
    assert classify_conversation([user(text)]) == ConversationType.POOL_DOSING


def test_declared_pool_beats_spa_mention():
    messages = [user("add chlorine to my hot tub")]
    assert classify_conversation(messages, None) == ConversationType.SPA_DOSING
    assert classify_conversation(messages, WaterType.POOL) == ConversationType.POOL_DOSING


def test_empty_transcript_is_general():
    assert classify_conversation([], WaterType.POOL) == ConversationType.GENERAL


def test_assistant_text_is_ignored():
    messages = [assistant("How much chlorine do you want to add to the pool?")]
    assert classify_conversation(messages, WaterType.POOL) == ConversationType.GENERAL


def test_only_last_three_user_messages_count():
    messages = [
        user("How much chlorine should I add to my pool?"),
        user("a"),
        user("b"),
        user("c"),
    ]
    assert classify_conversation(messages) == ConversationType.GENERAL
    assert classify_conversation(messages[:3]) == ConversationType.POOL_DOSING
