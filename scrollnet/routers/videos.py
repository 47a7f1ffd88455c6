"""Video feed router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from scrollnet.config import get_settings
from scrollnet.routers.deps import get_video_service, parse_video_id
from scrollnet.schemas.video import VideoDetailResponse, VideoFeedResponse
from scrollnet.services import VideoService, video_to_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/videos", tags=["videos"])
settings = get_settings()


@router.get("", response_model=VideoFeedResponse)
async def get_feed(
    limit: int = Query(settings.feed_page_size, ge=1, le=settings.feed_max_page_size),
    offset: int = Query(0, ge=0),
    service: VideoService = Depends(get_video_service),
):
    """
    Get one page of the feed.

    Only active videos are returned, newest first with ties broken by
    descending id, so the same offset/limit always yields the same order.
    """
    try:
        videos = await service.get_feed(limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"Failed to fetch video feed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch video feed",
        )

    return VideoFeedResponse(
        success=True,
        videos=[video_to_response(v) for v in videos],
        count=len(videos),
        offset=offset,
        limit=limit,
    )


@router.get("/{video_id}", response_model=VideoDetailResponse)
async def get_video(
    video_id: str,
    service: VideoService = Depends(get_video_service),
):
    """Get a single active video."""
    video = await service.get_video(parse_video_id(video_id))
    if video is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Video {video_id} not found",
        )
    return VideoDetailResponse(success=True, video=video_to_response(video))
