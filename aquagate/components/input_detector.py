# aquagate/components/input_detector.py
from typing import Dict, Sequence

from aquagate.common.models import Message
from aquagate.common.requirement_schema import RequirementSet
from aquagate.common.validation import user_contents


def detect_inputs(messages: Sequence[Message], requirements: RequirementSet) -> Dict[str, bool]:
    """
    Mark each required field as supplied when any of its trigger phrases shows up
    in user-authored text. Assistant questions never count as user inputs.
    """
    all_text = " ".join(user_contents(messages))
    return {
        field_id: any(phrase in all_text for phrase in triggers)
        for field_id, triggers in requirements.items()
    }
