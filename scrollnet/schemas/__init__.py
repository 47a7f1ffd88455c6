"""API schemas."""

from scrollnet.schemas.feedback import (
    FeedbackRecordResponse,
    FeedbackRequest,
    FeedbackRequiredResponse,
    FeedbackResponse,
)
from scrollnet.schemas.interaction import (
    InteractionRecord,
    InteractionRequest,
    InteractionResponse,
    VideoStatsResponse,
)
from scrollnet.schemas.video import VideoDetailResponse, VideoFeedResponse, VideoResponse

__all__ = [
    "VideoResponse",
    "VideoFeedResponse",
    "VideoDetailResponse",
    "InteractionRequest",
    "InteractionRecord",
    "InteractionResponse",
    "VideoStatsResponse",
    "FeedbackRequest",
    "FeedbackRecordResponse",
    "FeedbackResponse",
    "FeedbackRequiredResponse",
]
