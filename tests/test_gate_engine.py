import pytest

from aquagate import evaluate_gate
from aquagate.common.models import ConversationType, GateDecision, StructuredContext, WaterType
from aquagate.common.requirement_schema import get_requirements

POOL_FIELDS = ("volume", "free_chlorine", "combined_chlorine", "ph", "alkalinity", "cya", "sanitizer_type")


def user(text):
    return {"role": "user", "content": text}


def assistant(text):
    return {"role": "assistant", "content": text}


def test_scenario_a_pool_question_without_data_is_gated():
    decision = evaluate_gate([user("how much chlorine should I add to my pool?")])
    assert decision.conversation_type == ConversationType.POOL_DOSING
    assert decision.missing_fields == POOL_FIELDS
    assert decision.requires_gate is True
    assert "**free chlorine**" in decision.instructions
    assert "calculate_pool_volume" in decision.instructions


def test_scenario_b_complete_pool_inputs_release_gate():
    text = ("My pool is 15000 gallons, FC is 3, CC is 0.2, pH is 7.4, alkalinity is 90, "
            "CYA is 40, it's a chlorine pool. How much liquid chlorine should I add?")
    decision = evaluate_gate([user(text)])
    assert decision.conversation_type == ConversationType.POOL_DOSING
    assert decision.missing_fields == ()
    assert all(decision.detected.values())
    assert decision.requires_gate is False
    assert decision.instructions is None


def test_scenario_e_known_volume_satisfies_volume():
    text = "FC is 3, CC is 0.2, pH is 7.4, alkalinity is 90, CYA is 40, chlorine pool. How much shock do I need?"
    decision = evaluate_gate([user(text)], {"known_volume_gallons": 150})
    assert decision.conversation_type == ConversationType.POOL_DOSING
    assert "volume" not in decision.detected
    assert decision.requires_gate is False


def test_known_volume_never_listed_in_missing_or_instructions():
    decision = evaluate_gate(
        [user("How much chlorine should I add?")],
        StructuredContext(declared_water_type=WaterType.POOL, known_volume_gallons=15000),
    )
    assert decision.requires_gate is True
    assert "volume" not in decision.missing_fields
    assert "sanitizer_type" not in decision.missing_fields
    assert "pool volume" not in decision.instructions.lower()
    assert "calculate_pool_volume" not in decision.instructions


@pytest.mark.parametrize("messages, context", [
    ([user("What fish are compatible with bettas?")], {"declared_water_type": "freshwater"}),
    ([user("hello there")], None),
    ([], None),
    ([assistant("How much chlorine should I add to your pool?")], {"declared_water_type": "pool"}),
])
def test_general_conversations_are_never_gated(messages, context):
    decision = evaluate_gate(messages, context)
    assert decision == GateDecision(conversation_type=ConversationType.GENERAL)
    assert decision.missing_fields == ()
    assert decision.detected == {}
    assert decision.instructions is None


def test_assistant_prompts_do_not_satisfy_fields():
    messages = [
        user("how much chlorine should I add to my pool?"),
        assistant("Sure - what is the volume in gallons, free chlorine, cc, pH is?, alkalinity, cya, "
                  "and is it a chlorine pool?"),
    ]
    decision = evaluate_gate(messages)
    assert decision.missing_fields == POOL_FIELDS
    assert decision.requires_gate is True


def test_saltwater_aquarium_requires_salinity():
    messages = [user("My clownfish is sick, should I treat it?")]
    salt = evaluate_gate(messages, {"declared_water_type": "saltwater"})
    fresh = evaluate_gate(messages, {"declared_water_type": "freshwater"})
    assert "salinity" in salt.missing_fields
    assert "salinity" not in fresh.missing_fields
    assert "salinity" not in fresh.detected


def test_aquarium_gate_mentions_vet_referral():
    decision = evaluate_gate([user("My betta has fin rot, what should I do?")], {"declared_water_type": "freshwater"})
    assert decision.conversation_type == ConversationType.AQUARIUM_TREATMENT
    assert decision.detected["species"] is True
    assert "tank_size" in decision.missing_fields
    assert "aquatic veterinarian" in decision.instructions


def test_multi_turn_aquarium_inputs_release_gate():
    messages = [
        user("I have a 10 gallon tank"),
        assistant("Great! What fish do you keep?"),
        user("A betta fish. It has ich and I noticed it 3 days ago. Ammonia is 0, nitrite is 0, "
             "nitrate is 10ppm, temp is 78F. What medication should I use?"),
    ]
    decision = evaluate_gate(messages, {"declared_water_type": "freshwater"})
    assert decision.conversation_type == ConversationType.AQUARIUM_TREATMENT
    assert decision.missing_fields == ()
    assert decision.requires_gate is False


def test_salinity_reading_releases_saltwater_gate():
    messages = [
        user("My clownfish is sick, should I treat it? It's in a 40 gallon tank. Ammonia 0, nitrite 0, "
             "nitrate 5, temp 78, it started yesterday and is showing white patches. SG is 1.025"),
    ]
    decision = evaluate_gate(messages, {"declared_water_type": "saltwater"})
    assert decision.detected["salinity"] is True
    assert decision.requires_gate is False


# Every field's first trigger phrase, plus a phrase that confirms the type
_confirming_text = {
    ConversationType.POOL_DOSING: ("how much should I add to my pool", None),
    ConversationType.SPA_DOSING: ("shock hot tub", None),
    ConversationType.AQUARIUM_TREATMENT: ("my fish needs medication", "saltwater"),
}


@pytest.mark.parametrize("conversation_type", list(_confirming_text))
def test_all_trigger_phrases_present_releases_gate(conversation_type):
    intent, water_type = _confirming_text[conversation_type]
    triggers = [t[0] for t in get_requirements(conversation_type).values()]
    if water_type == "saltwater":
        triggers.append("salinity")
    context = {"declared_water_type": water_type} if water_type else None
    decision = evaluate_gate([user(intent + " " + " ".join(triggers))], context)
    assert decision.conversation_type == conversation_type
    assert decision.requires_gate is False


def test_evaluate_gate_is_idempotent():
    messages = [user("how much chlorine should I add to my pool?")]
    context = {"declared_water_type": "pool"}
    assert evaluate_gate(messages, context) == evaluate_gate(messages, context)


def test_gate_decision_cannot_be_mutated_in_place():
    decision = evaluate_gate([user("how much chlorine should I add to my pool?")])
    assert isinstance(decision.missing_fields, tuple)
    with pytest.raises(TypeError):
        decision.detected["volume"] = True
    assert decision.to_dict()["missing_fields"] == list(POOL_FIELDS)
