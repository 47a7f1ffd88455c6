"""Session-side pipeline: feed cursor, interaction and feedback clients."""

from scrollnet.client.api import ScrollNetAPI
from scrollnet.client.feed import (
    END_OF_FEED,
    PLACEHOLDER_VIDEOS,
    EndOfFeed,
    FeedCursor,
    FeedPage,
    VideoDescriptor,
)
from scrollnet.client.feedback import FeedbackSubmissionClient, SubmitResult
from scrollnet.client.interactions import InteractionStoreClient, RecordResult
from scrollnet.client.session import GestureOutcome, ScrollSession, SessionState

__all__ = [
    "ScrollNetAPI",
    "END_OF_FEED",
    "PLACEHOLDER_VIDEOS",
    "EndOfFeed",
    "FeedCursor",
    "FeedPage",
    "VideoDescriptor",
    "FeedbackSubmissionClient",
    "SubmitResult",
    "InteractionStoreClient",
    "RecordResult",
    "GestureOutcome",
    "ScrollSession",
    "SessionState",
]
