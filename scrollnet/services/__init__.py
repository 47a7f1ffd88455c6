"""Service layer for the ScrollNet backend."""

from scrollnet.services.feedback import FeedbackService
from scrollnet.services.interaction import InteractionService, build_interaction_upsert
from scrollnet.services.video import VideoService, video_to_response

__all__ = [
    "VideoService",
    "video_to_response",
    "InteractionService",
    "build_interaction_upsert",
    "FeedbackService",
]
