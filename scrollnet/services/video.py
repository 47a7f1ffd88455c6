"""Video feed service.

Serves active videos newest first. Ties on created_at are broken by
descending id so offset/limit pages are stable between calls.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scrollnet.models import Video
from scrollnet.schemas.video import VideoResponse

logger = logging.getLogger(__name__)


def video_to_response(video: Video) -> VideoResponse:
    return VideoResponse(
        id=str(video.id),
        title=video.title,
        description=video.description or "",
        source_url=video.source_url,
        duration_seconds=video.duration_seconds,
        tags=list(video.tags or []),
        thumbnail_url=video.thumbnail_url,
        created_at=video.created_at,
    )


class VideoService:
    """Read access to the videos table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def feed_query(self, limit: int, offset: int):
        """Active videos, newest first, stable under repeated pagination."""
        return (
            select(Video)
            .where(Video.is_active.is_(True))
            .order_by(Video.created_at.desc(), Video.id.desc())
            .offset(offset)
            .limit(limit)
        )

    async def get_feed(self, limit: int = 10, offset: int = 0) -> List[Video]:
        result = await self.db.execute(self.feed_query(limit, offset))
        videos = list(result.scalars().all())
        logger.debug(f"Feed page offset={offset} limit={limit} -> {len(videos)} videos")
        return videos

    async def get_video(self, video_id: uuid.UUID) -> Optional[Video]:
        result = await self.db.execute(
            select(Video).where(Video.id == video_id, Video.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def deactivate(self, video_id: uuid.UUID) -> bool:
        """Soft-delete a video so it drops out of every feed page."""
        video = await self.db.get(Video, video_id)
        if video is None:
            return False
        video.is_active = False
        await self.db.flush()
        logger.info(f"Deactivated video {video_id}")
        return True
