# aquagate/components/context_prefill.py
"""
Trim or extend a requirement set using facts already known about the selected
water body. Always returns a new read-only mapping; the registry tables are
never touched.
"""
from types import MappingProxyType
from typing import FrozenSet, Set

from aquagate.common.models import SALINE_WATER_TYPES, ConversationType, StructuredContext, WaterType
from aquagate.common.requirement_schema import SALTWATER_ADDITIONAL, RequirementSet

VOLUME_FIELDS = ("volume", "tank_size")

# conversation type -> declared water type that already implies the sanitizer
_IMPLIED_SANITIZER = {
    ConversationType.POOL_DOSING: WaterType.POOL,
    ConversationType.SPA_DOSING: WaterType.SPA,
}


def _added_fields(context: StructuredContext, conversation_type: ConversationType) -> RequirementSet:
    if (conversation_type == ConversationType.AQUARIUM_TREATMENT
            and context.declared_water_type in SALINE_WATER_TYPES):
        return SALTWATER_ADDITIONAL
    return MappingProxyType({})


def _removed_fields(context: StructuredContext, conversation_type: ConversationType) -> Set[str]:
    removed: Set[str] = set()
    if context.known_volume_gallons is not None:
        removed.update(VOLUME_FIELDS)
    implied = _IMPLIED_SANITIZER.get(conversation_type)
    if implied is not None and context.declared_water_type == implied:
        removed.add("sanitizer_type")
    return removed


def apply_context(
    requirements: RequirementSet,
    context: StructuredContext,
    conversation_type: ConversationType,
) -> RequirementSet:
    fields = dict(requirements)
    fields.update(_added_fields(context, conversation_type))
    for name in _removed_fields(context, conversation_type):
        fields.pop(name, None)
    return MappingProxyType(fields)


def apply_context_to_critical(
    critical: FrozenSet[str],
    context: StructuredContext,
    conversation_type: ConversationType,
) -> FrozenSet[str]:
    added = frozenset(_added_fields(context, conversation_type))
    return (critical | added) - _removed_fields(context, conversation_type)
