# aquagate/common/models.py
"""
Data model shared by the scope classifier and the input gate.

Inputs (Message, StructuredContext) are pydantic models so a broken integration
fails loudly at the boundary. Outputs (GateDecision, ScopeDecision) are plain
frozen dataclasses, recomputed on every turn and never stored.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class ConversationType(str, Enum):
    POOL_DOSING = "pool_dosing"
    SPA_DOSING = "spa_dosing"
    AQUARIUM_TREATMENT = "aquarium_treatment"
    GENERAL = "general"


class WaterType(str, Enum):
    FRESHWATER = "freshwater"
    SALTWATER = "saltwater"
    BRACKISH = "brackish"
    POOL = "pool"
    SPA = "spa"


SALINE_WATER_TYPES = frozenset({WaterType.SALTWATER, WaterType.BRACKISH})
AQUARIUM_WATER_TYPES = frozenset({WaterType.FRESHWATER, WaterType.SALTWATER, WaterType.BRACKISH})

# Raw aquarium record types -> water type
_SALTWATER_RECORD_TYPES = {"reef", "marine", "saltwater", "fowlr"}
_BRACKISH_RECORD_TYPES = {"brackish"}
_POOL_RECORD_TYPES = {"pool", "pool_chlorine", "pool_saltwater"}
_SPA_RECORD_TYPES = {"spa", "hot_tub", "hot tub"}


class Message(BaseModel):
    """One transcript entry as supplied by the transcript store."""
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    role: Literal["user", "assistant", "system"]
    content: str = ""
    has_attachment: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalize_wire_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "hasAttachment" in data and "has_attachment" not in data:
            data["has_attachment"] = data.pop("hasAttachment")
        image_url = data.get("imageUrl") or data.get("image_url")
        if image_url and "has_attachment" not in data:
            data["has_attachment"] = True
        # Stored transcripts occasionally carry null content (image-only turns)
        if data.get("content") is None:
            data["content"] = ""
        return data

    @property
    def is_user(self) -> bool:
        return self.role == "user"


class StructuredContext(BaseModel):
    """Already-known facts about the selected aquarium, pool or spa."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    declared_water_type: Optional[WaterType] = Field(
        default=None,
        validation_alias=AliasChoices("declared_water_type", "declaredWaterType", "water_type", "waterType"),
    )
    known_volume_gallons: Optional[float] = Field(
        default=None,
        gt=0,
        strict=True,
        validation_alias=AliasChoices("known_volume_gallons", "knownVolumeGallons", "volume_gallons"),
    )

    @field_validator("known_volume_gallons", mode="before")
    @classmethod
    def _non_positive_volume_is_unknown(cls, value: Any) -> Any:
        # A record saved without a volume stores 0
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value <= 0:
            return None
        return value

    @classmethod
    def from_aquarium(cls, aquarium_type: Optional[str], volume_gallons: Optional[float] = None) -> "StructuredContext":
        """Build context from a raw aquarium record (type string + stored volume)."""
        known = isinstance(volume_gallons, (int, float)) and not isinstance(volume_gallons, bool)
        volume = volume_gallons if known and volume_gallons > 0 else None
        return cls(declared_water_type=resolve_water_type(aquarium_type), known_volume_gallons=volume)


def resolve_water_type(aquarium_type: Optional[str]) -> Optional[WaterType]:
    if aquarium_type is None:
        return None
    t = aquarium_type.strip().lower()
    if not t:
        return None
    if t in _SALTWATER_RECORD_TYPES:
        return WaterType.SALTWATER
    if t in _BRACKISH_RECORD_TYPES:
        return WaterType.BRACKISH
    if t in _POOL_RECORD_TYPES:
        return WaterType.POOL
    if t in _SPA_RECORD_TYPES:
        return WaterType.SPA
    return WaterType.FRESHWATER


@dataclass(frozen=True)
class GateDecision:
    conversation_type: ConversationType
    missing_fields: Tuple[str, ...] = ()
    detected: Mapping[str, bool] = field(default_factory=lambda: MappingProxyType({}))
    requires_gate: bool = False
    instructions: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conversation_type": self.conversation_type.value,
            "missing_fields": list(self.missing_fields),
            "detected": dict(self.detected),
            "requires_gate": self.requires_gate,
            "instructions": self.instructions,
        }


@dataclass(frozen=True)
class ScopeDecision:
    in_scope: bool
    reason: Optional[str] = None
    redirect_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "in_scope": self.in_scope,
            "reason": self.reason,
            "redirect_message": self.redirect_message,
        }
