# aquagate/common/requirement_schema.py
"""
Required-field registry for the input gate.
Each conversation type maps to an ordered tuple of FieldSpec describing which
data the user must supply and which phrases count as evidence of it.
Tables are built once at import and exposed read-only.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

from aquagate.common.models import ConversationType

# FieldId -> trigger phrases
RequirementSet = Mapping[str, Tuple[str, ...]]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    triggers: Tuple[str, ...]
    label: str
    hint: str


POOL_DOSING_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("volume", ("volume", "gallons", "liters", "pool size", "how big", "pool is about"),
              "pool volume", "Pool volume (gallons)"),
    FieldSpec("free_chlorine", ("free chlorine", "fc", "chlorine level", "chlorine is"),
              "free chlorine", "Current free chlorine level"),
    FieldSpec("combined_chlorine", ("combined chlorine", "cc", "chloramines"),
              "combined chlorine", "Current combined chlorine level"),
    FieldSpec("ph", ("ph is", "ph level", "ph reading", "ph at"),
              "pH", "Current pH"),
    FieldSpec("alkalinity", ("alkalinity", "total alk", "ta is", "alk is"),
              "total alkalinity", "Total alkalinity"),
    FieldSpec("cya", ("cya", "cyanuric", "stabilizer", "conditioner level"),
              "CYA (stabilizer)", "CYA/stabilizer level"),
    FieldSpec("sanitizer_type", ("chlorine pool", "salt pool", "saltwater pool", "bromine"),
              "sanitizer type", "Sanitizer type (chlorine, salt, etc.)"),
)

SPA_DOSING_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("volume", ("volume", "gallons", "liters", "spa size", "hot tub size", "holds about"),
              "spa volume", "Spa volume (gallons)"),
    FieldSpec("sanitizer_level", ("chlorine", "bromine", "sanitizer level"),
              "sanitizer level", "Current sanitizer level (chlorine or bromine)"),
    FieldSpec("ph", ("ph is", "ph level", "ph reading", "ph at"),
              "pH", "Current pH"),
    FieldSpec("alkalinity", ("alkalinity", "total alk", "ta is", "alk is"),
              "total alkalinity", "Total alkalinity"),
    FieldSpec("sanitizer_type", ("chlorine spa", "bromine spa", "salt spa"),
              "sanitizer type", "Sanitizer type being used"),
)

AQUARIUM_TREATMENT_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("species", ("species", "fish", "betta", "goldfish", "cichlid", "guppy", "tetra", "barb",
                          "pleco", "cory", "shrimp", "snail"),
              "affected species", "What species/fish are affected"),
    FieldSpec("tank_size", ("gallon", "liter", "tank size", "tank is"),
              "tank size", "Tank size (gallons)"),
    FieldSpec("ammonia", ("ammonia",), "ammonia", "Current ammonia level"),
    FieldSpec("nitrite", ("nitrite",), "nitrite", "Current nitrite level"),
    FieldSpec("nitrate", ("nitrate",), "nitrate", "Current nitrate level"),
    FieldSpec("temperature", ("temp", "temperature", "degrees", "°f", "°c"),
              "water temperature", "Water temperature"),
    FieldSpec("symptoms", ("symptoms", "showing", "noticed", "looks like", "appears", "acting", "behavior"),
              "symptoms", "Specific symptoms observed"),
    FieldSpec("timeline", ("started", "days ago", "weeks ago", "yesterday", "this morning", "recently",
                           "suddenly", "gradually"),
              "timeline", "When symptoms started (timeline)"),
)

# Only required for saltwater and brackish systems
SALINITY_FIELD = FieldSpec("salinity", ("salinity", "sg", "specific gravity", "ppt"),
                           "salinity", "Salinity (specific gravity or ppt)")

SCHEMAS: Mapping[ConversationType, Tuple[FieldSpec, ...]] = MappingProxyType({
    ConversationType.POOL_DOSING: POOL_DOSING_FIELDS,
    ConversationType.SPA_DOSING: SPA_DOSING_FIELDS,
    ConversationType.AQUARIUM_TREATMENT: AQUARIUM_TREATMENT_FIELDS,
    ConversationType.GENERAL: (),
})


def _as_requirement_set(specs: Tuple[FieldSpec, ...]) -> RequirementSet:
    return MappingProxyType({s.name: s.triggers for s in specs})


REQUIREMENTS: Mapping[ConversationType, RequirementSet] = MappingProxyType(
    {ctype: _as_requirement_set(specs) for ctype, specs in SCHEMAS.items()}
)

# Every required field blocks the gate; there is no optional tier
CRITICAL_FIELDS: Mapping[ConversationType, FrozenSet[str]] = MappingProxyType(
    {ctype: frozenset(reqs) for ctype, reqs in REQUIREMENTS.items()}
)

SALTWATER_ADDITIONAL: RequirementSet = _as_requirement_set((SALINITY_FIELD,))

_SPECS_BY_TYPE: Dict[ConversationType, Dict[str, FieldSpec]] = {
    ctype: {s.name: s for s in specs} for ctype, specs in SCHEMAS.items()
}


def get_requirements(conversation_type: ConversationType) -> RequirementSet:
    return REQUIREMENTS[ConversationType(conversation_type)]


def get_critical_fields(conversation_type: ConversationType) -> FrozenSet[str]:
    return CRITICAL_FIELDS[ConversationType(conversation_type)]


def get_field_spec(conversation_type: ConversationType, field_id: str) -> FieldSpec:
    """Spec for a field as worded for this conversation type (pool volume vs spa volume)."""
    if field_id == SALINITY_FIELD.name:
        return SALINITY_FIELD
    return _SPECS_BY_TYPE[ConversationType(conversation_type)][field_id]


def field_label(conversation_type: ConversationType, field_id: str) -> str:
    try:
        return get_field_spec(conversation_type, field_id).label
    except KeyError:
        return field_id.replace("_", " ")
