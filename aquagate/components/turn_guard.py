# aquagate/components/turn_guard.py
"""
Turn guard for the aquatics assistant.
Responsibilities:
- Scope check first; off-topic turns get the redirect and nothing else runs
- Input gate second; gated turns get a system-prompt section to prepend
- Structured output the chat handler can act on without re-deriving anything
"""
from typing import Any, Dict, Optional, Sequence

from aquagate.common.logger import get_logger
from aquagate.common.models import GateDecision
from aquagate.common.validation import ContextLike, MessageLike, coerce_context, coerce_transcript
from aquagate.components.gate_engine import GateDecisionEngine
from aquagate.components.scope_classifier import evaluate_scope

logger = get_logger(__name__)

STATUS_REDIRECT = "redirect"
STATUS_GATED = "gated"
STATUS_PROCEED = "proceed"


def build_prompt_section(decision: GateDecision) -> str:
    """Gate instructions wrapped for injection at the top of the generator's system prompt."""
    if not decision.requires_gate or not decision.instructions:
        return ""
    return f"\n{decision.instructions}\n\n---\n\n"


class TurnGuard:
    def __init__(self, engine: Optional[GateDecisionEngine] = None) -> None:
        self.engine = engine or GateDecisionEngine()

    def handle_turn(self, messages: Sequence[MessageLike], context: ContextLike = None) -> Dict[str, Any]:
        # Validate up front so a bad context fails even when scope would redirect
        transcript = coerce_transcript(messages)
        structured = coerce_context(context)

        scope = evaluate_scope(transcript)
        if not scope.in_scope:
            return {
                "status": STATUS_REDIRECT,
                "message": scope.redirect_message,
                "scope": scope.to_dict(),
                "gate": None,
                "prompt_section": "",
            }

        decision = self.engine.evaluate(transcript, structured)
        status = STATUS_GATED if decision.requires_gate else STATUS_PROCEED
        logger.info(f"Turn guard: status={status} type={decision.conversation_type.value}")
        return {
            "status": status,
            "message": None,
            "scope": scope.to_dict(),
            "gate": decision.to_dict(),
            "prompt_section": build_prompt_section(decision),
        }
