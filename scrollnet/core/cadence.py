"""Feedback cadence tracking.

Counts consumed videos per identity and asks for feedback once every N
videos. The counter resets as soon as it fires, and again whenever the user
submits or skips the prompt, so a prompt never repeats inside one window.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from scrollnet.core.identity import Identity

logger = logging.getLogger(__name__)

DEFAULT_CADENCE = 5


@dataclass(frozen=True)
class CadenceSignal:
    feedback_required: bool
    video_id_for_feedback: Optional[str] = None


class FeedbackCadenceTracker:
    """Session-scoped per-identity counters of videos consumed since the last prompt."""

    def __init__(self, cadence: int = DEFAULT_CADENCE):
        if cadence < 1:
            raise ValueError(f"cadence must be >= 1, got {cadence}")
        self.cadence = cadence
        self._windows: Dict[str, List[str]] = {}

    def on_video_consumed(self, identity: Identity, video_id: str) -> CadenceSignal:
        """Count one consumed video; fire on the N-th and anchor feedback to it."""
        window = self._windows.setdefault(identity.id, [])
        window.append(video_id)

        if len(window) >= self.cadence:
            target = window[-1]
            self._windows[identity.id] = []
            logger.info(f"Feedback required for {identity.id} after {self.cadence} videos (target {target})")
            return CadenceSignal(feedback_required=True, video_id_for_feedback=target)

        return CadenceSignal(feedback_required=False)

    def count(self, identity: Identity) -> int:
        return len(self._windows.get(identity.id, ()))

    def remaining(self, identity: Identity) -> int:
        """Videos left until the next prompt."""
        return self.cadence - self.count(identity)

    def reset(self, identity: Identity) -> None:
        self._windows.pop(identity.id, None)
