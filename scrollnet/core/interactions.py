"""Interaction event types and payloads.

Payloads are a closed set of variants matched at the store boundary:

- EmojiPayload(key)          for `emoji`
- ViewPayload(duration_ms)   for `view` (optional)
- None                       for `like` / `dislike`
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from scrollnet.core.errors import InvalidInput
from scrollnet.core.gestures import EMOJI_REACTIONS, Classification, Gesture
from scrollnet.core.identity import Identity


class InteractionType(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"
    EMOJI = "emoji"
    VIEW = "view"


@dataclass(frozen=True)
class EmojiPayload:
    key: str


@dataclass(frozen=True)
class ViewPayload:
    duration_ms: int


InteractionPayload = Union[EmojiPayload, ViewPayload, None]


@dataclass(frozen=True)
class InteractionEvent:
    identity: Identity
    video_id: str
    type: InteractionType
    payload: InteractionPayload = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def parse_type(value: Union[str, InteractionType, None]) -> InteractionType:
    if isinstance(value, InteractionType):
        return value
    try:
        return InteractionType(value)
    except ValueError:
        raise InvalidInput(f"Unknown interaction type: {value!r}") from None


def validate_payload(type_: InteractionType, payload: InteractionPayload) -> None:
    """Reject payloads whose variant does not belong to the interaction type."""
    if type_ is InteractionType.EMOJI:
        if not isinstance(payload, EmojiPayload):
            raise InvalidInput("emoji interactions require an EmojiPayload")
        if payload.key not in EMOJI_REACTIONS:
            raise InvalidInput(f"Unknown emoji key: {payload.key!r}")
    elif type_ is InteractionType.VIEW:
        if payload is not None and not isinstance(payload, ViewPayload):
            raise InvalidInput("view interactions accept only a ViewPayload")
        if isinstance(payload, ViewPayload) and payload.duration_ms < 0:
            raise InvalidInput("view duration must be >= 0")
    elif payload is not None:
        raise InvalidInput(f"{type_.value} interactions carry no payload")


def payload_to_data(payload: InteractionPayload) -> Dict[str, Any]:
    """Serialize a payload into the `data` object sent to the backend."""
    if isinstance(payload, EmojiPayload):
        reaction = EMOJI_REACTIONS[payload.key]
        return {"key": reaction.key, "emoji": reaction.emoji, "label": reaction.label}
    if isinstance(payload, ViewPayload):
        return {"durationMs": payload.duration_ms}
    return {}


def payload_from_data(type_: InteractionType, data: Optional[Dict[str, Any]]) -> InteractionPayload:
    """Inverse of payload_to_data; used by the backend to validate incoming bodies."""
    data = data or {}
    if type_ is InteractionType.EMOJI:
        key = data.get("key")
        if not isinstance(key, str):
            raise InvalidInput("emoji interactions require data.key")
        return EmojiPayload(key=key)
    if type_ is InteractionType.VIEW:
        duration = data.get("durationMs")
        if duration is None:
            return None
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise InvalidInput("data.durationMs must be an integer")
        return ViewPayload(duration_ms=duration)
    return None


def from_classification(classification: Classification) -> Optional[tuple]:
    """Map a classified gesture to (type, payload), or None when nothing is stored."""
    if classification.gesture is Gesture.LIKE:
        return InteractionType.LIKE, None
    if classification.gesture is Gesture.DISLIKE:
        return InteractionType.DISLIKE, None
    if classification.gesture is Gesture.EMOJI:
        return InteractionType.EMOJI, EmojiPayload(key=classification.emoji_key)
    return None
