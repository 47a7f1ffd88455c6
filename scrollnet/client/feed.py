"""Feed cursor.

Walks the backend feed one video at a time. Pages are fetched lazily as
the buffered page runs out; callers only ever see `advance()` and a
terminal END_OF_FEED.

When the backend cannot be reached the cursor serves a small built-in
placeholder set flagged `degraded=True` instead of raising, so the feed is
never blank.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Deque, Dict, Optional, Tuple, Union

from scrollnet.client.api import ScrollNetAPI
from scrollnet.core.errors import InvalidInput, StoreUnavailable
from scrollnet.core.telemetry import LoggingTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VideoDescriptor:
    id: str
    title: str
    description: str
    source_url: str
    duration_seconds: Optional[int]
    tags: Tuple[str, ...] = ()
    thumbnail_url: Optional[str] = None
    created_at: Optional[datetime] = None
    degraded: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "VideoDescriptor":
        created_at = data.get("createdAt")
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "Untitled Video",
            description=data.get("description") or "",
            source_url=data["sourceUrl"],
            duration_seconds=data.get("durationSeconds"),
            tags=tuple(data.get("tags") or ()),
            thumbnail_url=data.get("thumbnailUrl"),
            created_at=_parse_timestamp(created_at),
        )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class EndOfFeed:
    """Terminal cursor state: the store has no more active videos."""

    def __repr__(self) -> str:
        return "END_OF_FEED"

    def __bool__(self) -> bool:
        return False


END_OF_FEED = EndOfFeed()

PLACEHOLDER_VIDEOS: Tuple[VideoDescriptor, ...] = (
    VideoDescriptor(
        id="fallback-1",
        title="Welcome to ScrollNet",
        description="Get started with our mobile-first video platform",
        source_url="https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4",
        duration_seconds=596,
        tags=("welcome", "intro"),
        degraded=True,
    ),
    VideoDescriptor(
        id="fallback-2",
        title="Swipe Tutorial",
        description="Learn how to navigate with swipe gestures",
        source_url="https://commondatastorage.googleapis.com/gtv-videos-bucket/sample/ElephantsDream.mp4",
        duration_seconds=653,
        tags=("tutorial", "gestures"),
        degraded=True,
    ),
)


@dataclass(frozen=True)
class FeedPage:
    videos: Tuple[VideoDescriptor, ...]
    offset: int
    limit: int
    degraded: bool = False
    error: Optional[str] = None


@dataclass
class CursorState:
    position: int = 0
    videos_consumed_count: int = 0
    next_offset: int = 0
    exhausted: bool = False
    degraded: bool = False
    buffer: Deque[VideoDescriptor] = field(default_factory=deque)


class FeedCursor:
    """
    Ordered, paginated walk over the active feed.

    Mutations are serialized through one lock per cursor so rapid repeated
    gestures cannot double-advance.
    """

    def __init__(
        self,
        api: ScrollNetAPI,
        page_size: int = 10,
        telemetry: Optional[TelemetrySink] = None,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.api = api
        self.page_size = page_size
        self.telemetry = telemetry or LoggingTelemetrySink()
        self.state = CursorState()
        self._lock = asyncio.Lock()
        self._started = False

    @property
    def position(self) -> int:
        return self.state.position

    @property
    def videos_consumed_count(self) -> int:
        return self.state.videos_consumed_count

    @property
    def degraded(self) -> bool:
        return self.state.degraded

    async def fetch_page(self, offset: int, limit: int) -> FeedPage:
        """Fetch one page. Never raises on store failure; returns placeholders instead."""
        if offset < 0 or limit < 1:
            raise InvalidInput(f"Invalid page request offset={offset} limit={limit}")
        try:
            data = await self.api.get_videos(limit=limit, offset=offset)
            videos = tuple(VideoDescriptor.from_api(v) for v in data.get("videos") or ())
        except (StoreUnavailable, KeyError, TypeError, ValueError) as e:
            self.telemetry.emit(
                TelemetryEvent(
                    name="feed.degraded",
                    error=str(e),
                    context={"offset": offset, "limit": limit},
                )
            )
            return FeedPage(
                videos=PLACEHOLDER_VIDEOS, offset=offset, limit=limit, degraded=True, error=str(e)
            )
        return FeedPage(videos=videos, offset=offset, limit=limit)

    async def _fill(self) -> None:
        state = self.state
        if state.buffer or state.exhausted:
            return
        page = await self.fetch_page(state.next_offset, self.page_size)
        state.degraded = page.degraded
        state.buffer.extend(page.videos)
        if page.degraded:
            # Offset stays put so the next fill retries the real feed
            return
        state.next_offset += len(page.videos)
        if len(page.videos) < self.page_size:
            state.exhausted = True
            logger.info(f"Feed exhausted after {state.next_offset} videos")

    async def current(self) -> Union[VideoDescriptor, EndOfFeed]:
        """Video at the cursor position, loading the first page on first use."""
        async with self._lock:
            if not self._started:
                self._started = True
                await self._fill()
            return self.state.buffer[0] if self.state.buffer else END_OF_FEED

    async def advance(self) -> Union[VideoDescriptor, EndOfFeed]:
        """Consume the current video and move to the next one."""
        async with self._lock:
            state = self.state
            if not self._started:
                self._started = True
                await self._fill()
            if not state.buffer:
                return END_OF_FEED

            state.buffer.popleft()
            state.position += 1
            state.videos_consumed_count += 1
            await self._fill()
            return state.buffer[0] if state.buffer else END_OF_FEED

    async def reload(self) -> Union[VideoDescriptor, EndOfFeed]:
        """Drop placeholder content and retry the real feed from where it stopped."""
        async with self._lock:
            state = self.state
            if state.degraded:
                state.buffer.clear()
                state.degraded = False
            state.exhausted = False
            self._started = True
            await self._fill()
            return state.buffer[0] if state.buffer else END_OF_FEED
