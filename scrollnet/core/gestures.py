"""Gesture classification for the swipe feed.

Turns a pointer/touch delta measured from gesture start to release into one
of a fixed set of interaction events:

- horizontal swipe right  -> like
- horizontal swipe left   -> dislike
- upward swipe            -> next (advance without reacting)
- anything shorter        -> tap (toggle play/pause)

Ties between axes (|dx| == |dy|) are resolved as horizontal so a diagonal
swipe always counts as a reaction. Emoji buttons bypass gestures entirely.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from scrollnet.core.errors import InvalidInput

DEFAULT_SWIPE_THRESHOLD = 50.0


class Gesture(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"
    NEXT = "next"
    TAP = "tap"
    EMOJI = "emoji"


@dataclass(frozen=True)
class EmojiReaction:
    key: str
    emoji: str
    label: str


EMOJI_REACTIONS: Dict[str, EmojiReaction] = {
    r.key: r
    for r in (
        EmojiReaction("love", "❤️", "Love"),
        EmojiReaction("funny", "😂", "Funny"),
        EmojiReaction("amazing", "😍", "Amazing"),
        EmojiReaction("thinking", "🤔", "Thinking"),
        EmojiReaction("fire", "🔥", "Fire"),
        EmojiReaction("applause", "👏", "Applause"),
        EmojiReaction("wow", "😮", "Wow"),
        EmojiReaction("perfect", "💯", "Perfect"),
    )
}


@dataclass(frozen=True)
class Classification:
    """Result of classifying one gesture or button press."""

    gesture: Gesture
    emoji_key: Optional[str] = None

    @property
    def is_reaction(self) -> bool:
        """True when the classification should be persisted as an interaction."""
        return self.gesture in (Gesture.LIKE, Gesture.DISLIKE, Gesture.EMOJI)

    @property
    def advances_feed(self) -> bool:
        return self.gesture in (Gesture.LIKE, Gesture.DISLIKE, Gesture.NEXT)

    @property
    def event_name(self) -> str:
        if self.gesture is Gesture.EMOJI:
            return f"emoji:{self.emoji_key}"
        return self.gesture.value


def classify(dx: float, dy: float, threshold: float = DEFAULT_SWIPE_THRESHOLD) -> Classification:
    """
    Classify a swipe from its displacement vector.

    Args:
        dx: Horizontal displacement (positive = right)
        dy: Vertical displacement (negative = up, screen coordinates)
        threshold: Minimum travel in logical pixels

    Returns:
        Classification with gesture like/dislike/next/tap
    """
    if threshold <= 0 or not math.isfinite(threshold):
        raise InvalidInput(f"Swipe threshold must be a positive number, got {threshold}")
    if not (math.isfinite(dx) and math.isfinite(dy)):
        raise InvalidInput(f"Gesture delta must be finite, got ({dx}, {dy})")

    if abs(dx) >= abs(dy):
        if dx > threshold:
            return Classification(Gesture.LIKE)
        if dx < -threshold:
            return Classification(Gesture.DISLIKE)
    if dy < -threshold:
        return Classification(Gesture.NEXT)
    return Classification(Gesture.TAP)


def classify_emoji(key: str) -> Classification:
    """Classify an explicit emoji button press."""
    if key not in EMOJI_REACTIONS:
        raise InvalidInput(f"Unknown emoji key: {key!r}")
    return Classification(Gesture.EMOJI, emoji_key=key)
