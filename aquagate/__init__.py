from aquagate.common.models import (
    ConversationType,
    GateDecision,
    Message,
    ScopeDecision,
    StructuredContext,
    WaterType,
)
from aquagate.components.gate_engine import evaluate_gate
from aquagate.components.scope_classifier import evaluate_scope

__all__ = [
    "ConversationType",
    "GateDecision",
    "Message",
    "ScopeDecision",
    "StructuredContext",
    "WaterType",
    "evaluate_gate",
    "evaluate_scope",
]
