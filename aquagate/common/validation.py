# aquagate/common/validation.py
"""
Boundary checks for the two entry points.
Structural problems are caller bugs, so they raise InvalidInputError instead of
degrading into a quiet 'general' or 'out of scope' answer.
"""
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from aquagate.common.custom_exception import InvalidInputError
from aquagate.common.logger import get_logger
from aquagate.common.models import Message, StructuredContext

logger = get_logger(__name__)

MessageLike = Union[Message, Mapping[str, Any]]
ContextLike = Union[StructuredContext, Mapping[str, Any], None]


def coerce_transcript(messages: Sequence[MessageLike]) -> List[Message]:
    if isinstance(messages, (str, bytes)) or not isinstance(messages, (list, tuple)):
        logger.warning(f"Rejected transcript of type {type(messages).__name__}")
        raise InvalidInputError(f"Transcript must be a list of messages, got {type(messages).__name__}")

    transcript: List[Message] = []
    for index, raw in enumerate(messages):
        if isinstance(raw, Message):
            transcript.append(raw)
            continue
        if not isinstance(raw, Mapping):
            logger.warning(f"Rejected message #{index} of type {type(raw).__name__}")
            raise InvalidInputError(f"Message #{index} must be a mapping, got {type(raw).__name__}")
        try:
            transcript.append(Message.model_validate(dict(raw)))
        except ValidationError as e:
            logger.warning(f"Rejected malformed message #{index}: {e.error_count()} error(s)")
            raise InvalidInputError(f"Message #{index} is malformed", e) from e
    return transcript


def coerce_context(context: ContextLike) -> StructuredContext:
    if context is None:
        return StructuredContext()
    if isinstance(context, StructuredContext):
        return context
    if not isinstance(context, Mapping):
        logger.warning(f"Rejected structured context of type {type(context).__name__}")
        raise InvalidInputError(f"Structured context must be a mapping, got {type(context).__name__}")
    try:
        return StructuredContext.model_validate(dict(context))
    except ValidationError as e:
        logger.warning(f"Rejected malformed structured context: {e.error_count()} error(s)")
        raise InvalidInputError("Structured context is malformed", e) from e


def user_contents(messages: Sequence[Message], last: Optional[int] = None) -> List[str]:
    """Lowercased content of user-authored messages, optionally only the last N."""
    contents = [m.content.lower() for m in messages if m.is_user]
    if last is not None:
        contents = contents[-last:] if last > 0 else []
    return contents
