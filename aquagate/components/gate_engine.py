# aquagate/components/gate_engine.py
"""
Input Gate
- Classifies the turn (pool dosing / spa dosing / aquarium treatment / general)
- Trims the required-field set with already-known context
- Scans user text for evidence of each field
- Blocks actionable dosing/treatment guidance while any critical field is missing

The engine never fills in a value and never computes a dose; it only decides
whether the generator must ask first, and what to tell it.
"""
from types import MappingProxyType
from typing import Optional, Sequence

from aquagate.common.logger import get_logger
from aquagate.common.models import ConversationType, GateDecision
from aquagate.common.requirement_schema import get_critical_fields, get_requirements
from aquagate.common.templates import build_gate_instructions
from aquagate.common.validation import ContextLike, MessageLike, coerce_context, coerce_transcript
from aquagate.components.context_prefill import apply_context, apply_context_to_critical
from aquagate.components.conversation_classifier import classify_conversation
from aquagate.components.input_detector import detect_inputs

logger = get_logger(__name__)


class GateDecisionEngine:
    """Combines classification, context prefill and input detection into a GateDecision."""

    def evaluate(self, messages: Sequence[MessageLike], context: ContextLike = None) -> GateDecision:
        transcript = coerce_transcript(messages)
        structured = coerce_context(context)

        conversation_type = classify_conversation(transcript, structured.declared_water_type)
        if conversation_type == ConversationType.GENERAL:
            return GateDecision(conversation_type=conversation_type)

        requirements = apply_context(get_requirements(conversation_type), structured, conversation_type)
        critical = apply_context_to_critical(get_critical_fields(conversation_type), structured, conversation_type)

        detected = detect_inputs(transcript, requirements)
        missing_fields = [f for f in requirements if not detected[f]]
        critical_missing = [f for f in missing_fields if f in critical]
        requires_gate = len(critical_missing) > 0

        instructions: Optional[str] = None
        if requires_gate:
            instructions = build_gate_instructions(conversation_type, missing_fields, list(requirements))

        logger.info(
            f"Input gate: type={conversation_type.value} requires_gate={requires_gate} "
            f"missing={missing_fields}"
        )
        return GateDecision(
            conversation_type=conversation_type,
            missing_fields=tuple(missing_fields),
            detected=MappingProxyType(detected),
            requires_gate=requires_gate,
            instructions=instructions,
        )


_ENGINE = GateDecisionEngine()


def evaluate_gate(messages: Sequence[MessageLike], context: ContextLike = None) -> GateDecision:
    """
    Decide whether the generator may give numeric dosing/treatment guidance this turn.
    If requires_gate is True, pass `instructions` to the generator as steering context.
    """
    return _ENGINE.evaluate(messages, context)
