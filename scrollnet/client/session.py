"""Swipe session.

One ScrollSession per client session. It owns the explicit SessionState
(cursor, cadence counters, identity, pending feedback prompt) and exposes
the UI handlers:

- on_gesture(dx, dy): like / dislike / next / tap
- on_emoji(key):      emoji reaction, feed stays put
- on_video_ended():   playback finished, move on
- submit_feedback / skip_feedback for the prompt

Interaction writes are optimistic: they are scheduled as background tasks
and the feed advances immediately. Writes for the same video are chained so
they reach the backend in gesture order; different videos are independent.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Set, Union

from scrollnet.client.api import ScrollNetAPI
from scrollnet.client.feed import EndOfFeed, FeedCursor, VideoDescriptor
from scrollnet.client.feedback import FeedbackSubmissionClient, SubmitResult
from scrollnet.client.interactions import InteractionStoreClient, RecordResult
from scrollnet.config import Settings, get_settings
from scrollnet.core.cadence import CadenceSignal, FeedbackCadenceTracker
from scrollnet.core.feedback import FeedbackAnswers
from scrollnet.core.gestures import Classification, Gesture, classify, classify_emoji
from scrollnet.core.identity import AuthProvider, Identity, SessionIdentityResolver
from scrollnet.core.interactions import InteractionType, ViewPayload, from_classification
from scrollnet.core.telemetry import LoggingTelemetrySink, TelemetrySink

logger = logging.getLogger(__name__)

FeedItem = Union[VideoDescriptor, EndOfFeed]


@dataclass
class SessionState:
    """Everything one session mutates. Never shared across sessions."""

    resolver: SessionIdentityResolver
    cursor: FeedCursor
    cadence: FeedbackCadenceTracker
    is_playing: bool = True
    pending_feedback_video_id: Optional[str] = None
    feedback_open: bool = False
    reaction_counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class GestureOutcome:
    classification: Classification
    video: FeedItem
    cadence: Optional[CadenceSignal] = None


class ScrollSession:
    def __init__(
        self,
        api: Optional[ScrollNetAPI] = None,
        auth_provider: Optional[AuthProvider] = None,
        settings: Optional[Settings] = None,
        telemetry: Optional[TelemetrySink] = None,
        resolver: Optional[SessionIdentityResolver] = None,
        record_views: bool = False,
    ):
        self.settings = settings or get_settings()
        self.api = api or ScrollNetAPI(
            base_url=self.settings.api_base_url, timeout=self.settings.request_timeout
        )
        self.telemetry = telemetry or LoggingTelemetrySink()
        self.record_views = record_views

        tracker = FeedbackCadenceTracker(self.settings.feedback_cadence)
        self.state = SessionState(
            resolver=resolver or SessionIdentityResolver(auth_provider),
            cursor=FeedCursor(self.api, self.settings.feed_page_size, self.telemetry),
            cadence=tracker,
        )
        self.interactions = InteractionStoreClient(self.api, self.telemetry)
        self.feedback = FeedbackSubmissionClient(self.api, tracker, self.telemetry)

        self._pending: Set[asyncio.Task] = set()
        self._tails: Dict[str, asyncio.Task] = {}

    @property
    def identity(self) -> Identity:
        return self.state.resolver.resolve()

    async def start(self) -> FeedItem:
        """Load the first page. Shows placeholder content when the backend is down."""
        return await self.state.cursor.current()

    async def retry_feed(self) -> FeedItem:
        return await self.state.cursor.reload()

    async def current_video(self) -> FeedItem:
        return await self.state.cursor.current()

    async def on_gesture(self, dx: float, dy: float) -> GestureOutcome:
        classification = classify(dx, dy, self.settings.swipe_threshold)
        video = await self.state.cursor.current()

        if classification.gesture is Gesture.TAP:
            self.state.is_playing = not self.state.is_playing
            return GestureOutcome(classification, video)

        if isinstance(video, EndOfFeed):
            return GestureOutcome(classification, video)

        mapped = from_classification(classification)
        if mapped is not None:
            self._schedule_record(video, *mapped)

        signal, next_video = await self._consume(video)
        return GestureOutcome(classification, next_video, signal)

    async def on_emoji(self, key: str) -> GestureOutcome:
        classification = classify_emoji(key)
        video = await self.state.cursor.current()
        if isinstance(video, EndOfFeed):
            return GestureOutcome(classification, video)

        type_, payload = from_classification(classification)
        self._schedule_record(video, type_, payload)
        self.state.reaction_counts[key] = self.state.reaction_counts.get(key, 0) + 1
        return GestureOutcome(classification, video)

    async def on_video_ended(self, watched_ms: Optional[int] = None) -> GestureOutcome:
        video = await self.state.cursor.current()
        classification = Classification(Gesture.NEXT)
        if isinstance(video, EndOfFeed):
            return GestureOutcome(classification, video)
        signal, next_video = await self._consume(video, watched_ms)
        return GestureOutcome(classification, next_video, signal)

    async def _consume(
        self, video: VideoDescriptor, watched_ms: Optional[int] = None
    ) -> tuple:
        if self.record_views:
            payload = ViewPayload(duration_ms=watched_ms) if watched_ms is not None else None
            self._schedule_record(video, InteractionType.VIEW, payload)

        signal = self.state.cadence.on_video_consumed(self.identity, video.id)
        if signal.feedback_required:
            if self.state.feedback_open:
                # The open prompt keeps its original target
                logger.info(f"Feedback prompt already open, not retargeting to {video.id}")
            else:
                self.state.feedback_open = True
                self.state.pending_feedback_video_id = (
                    None if video.degraded else signal.video_id_for_feedback
                )

        next_video = await self.state.cursor.advance()
        self.state.is_playing = True
        return signal, next_video

    def _schedule_record(self, video: VideoDescriptor, type_: InteractionType, payload) -> None:
        if video.degraded:
            logger.debug(f"Not recording {type_.value} on placeholder video {video.id}")
            return
        identity = self.identity

        async def write() -> RecordResult:
            return await self.interactions.record(identity, video.id, type_, payload)

        self._chain(video.id, write)

    def _chain(self, video_id: str, write: Callable[[], Awaitable[Any]]) -> asyncio.Task:
        previous = self._tails.get(video_id)

        async def run():
            if previous is not None:
                await asyncio.wait({previous})
            return await write()

        task = asyncio.get_running_loop().create_task(run())
        self._tails[video_id] = task
        self._pending.add(task)

        def done(t: asyncio.Task) -> None:
            self._pending.discard(t)
            if self._tails.get(video_id) is t:
                del self._tails[video_id]
            if not t.cancelled() and t.exception() is not None:
                logger.error(f"Interaction write for {video_id} failed: {t.exception()}")

        task.add_done_callback(done)
        return task

    async def submit_feedback(
        self, answers: Union[FeedbackAnswers, Mapping[str, Any], None]
    ) -> SubmitResult:
        """Submit the open prompt. ValidationError leaves the prompt open."""
        result = await self.feedback.submit(
            self.identity, self.state.pending_feedback_video_id, answers
        )
        self._close_prompt()
        return result

    def skip_feedback(self) -> None:
        self.feedback.skip(self.identity)
        self._close_prompt()

    def _close_prompt(self) -> None:
        self.state.feedback_open = False
        self.state.pending_feedback_video_id = None

    async def drain(self) -> None:
        """Wait for every in-flight interaction write."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        self.state.resolver.end_session()
        await self.api.aclose()
