# aquagate/common/templates.py
"""
Gate instruction templates.
- GATE_TEMPLATES holds the shared base text plus one section per conversation type.
- build_gate_instructions(conversation_type, missing_fields, required_fields) fills them in.
- The text only ever tells the generator what to ask; it never carries a value or a dose.
"""
from typing import Dict, Optional, Sequence

from aquagate.common.models import ConversationType
from aquagate.common.requirement_schema import SCHEMAS, field_label, get_field_spec

# ===========================
# Templates
# ===========================
GATE_TEMPLATES: Dict[str, str] = {
    "base": """
CRITICAL INPUT GATE - BEFORE PROVIDING DOSING/TREATMENT ADVICE:

You are missing required information: {formatted_missing}

DO NOT provide specific dosing amounts or treatment recommendations until you have ALL required information.

Instead, respond with:
1. Acknowledge what the user is trying to do
2. Explain that you need a few more details to give safe, accurate advice
3. Ask specifically about the missing items listed above
4. Format as a friendly, brief question

Example format:
"I'd be happy to help with that! To give you accurate dosing recommendations, I need to know:
{example_items}

Could you share those details?"
""",
    ConversationType.POOL_DOSING.value: """
FOR POOL DOSING, always require:
{requirement_lines}
""",
    ConversationType.SPA_DOSING.value: """
FOR SPA/HOT TUB DOSING, always require:
{requirement_lines}
""",
    ConversationType.AQUARIUM_TREATMENT.value: """
FOR AQUARIUM TREATMENT, always require:
{requirement_lines}

If symptoms sound serious or urgent, recommend consulting an aquatic veterinarian.
""",
    "volume_helper": """
If user doesn't know the {water_body} volume, offer to help calculate it using the calculate_pool_volume tool.
""",
}

_VOLUME_HELPER_BODIES = {
    ConversationType.POOL_DOSING: "pool",
    ConversationType.SPA_DOSING: "spa",
}


# ===========================
# Build instructions
# ===========================
def build_gate_instructions(
    conversation_type: ConversationType,
    missing_fields: Sequence[str],
    required_fields: Optional[Sequence[str]] = None,
) -> str:
    """
    Instructions that steer the generator into asking for exactly the missing fields.
    - required_fields: the active (context-trimmed) field ids; defaults to the full registry set.
    Returns "" when nothing is missing.
    """
    if not missing_fields:
        return ""

    if required_fields is None:
        required_fields = [spec.name for spec in SCHEMAS[conversation_type]]

    labels = [field_label(conversation_type, f) for f in missing_fields]
    instructions = GATE_TEMPLATES["base"].format(
        formatted_missing=", ".join(f"**{label}**" for label in labels),
        example_items="\n".join(f"- {label}" for label in labels),
    )

    section = GATE_TEMPLATES.get(conversation_type.value)
    if section:
        requirement_lines = "\n".join(
            f"- {get_field_spec(conversation_type, f).hint}" for f in required_fields
        )
        instructions += section.format(requirement_lines=requirement_lines)

    water_body = _VOLUME_HELPER_BODIES.get(conversation_type)
    if water_body and "volume" in required_fields:
        instructions += GATE_TEMPLATES["volume_helper"].format(water_body=water_body)

    return instructions
