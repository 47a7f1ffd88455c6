"""Database models."""

from scrollnet.models.feedback import Feedback
from scrollnet.models.interaction import UserInteraction
from scrollnet.models.video import Video

__all__ = ["Video", "UserInteraction", "Feedback"]
