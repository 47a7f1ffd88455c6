"""Video feed API schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoResponse(BaseModel):
    """Video descriptor as served to the feed."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., description="Video ID")
    title: str = Field(..., description="Video title")
    description: str = Field("", description="Video description")
    source_url: str = Field(..., alias="sourceUrl", description="Publicly playable URL")
    duration_seconds: Optional[int] = Field(None, alias="durationSeconds")
    tags: List[str] = Field(default_factory=list, description="Ordered tags")
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class VideoFeedResponse(BaseModel):
    """One page of the feed, newest first."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True, description="Whether the page was fetched")
    videos: List[VideoResponse] = Field(default_factory=list)
    count: int = Field(0, description="Number of videos in this page")
    offset: int = Field(0, ge=0)
    limit: int = Field(10, ge=1)


class VideoDetailResponse(BaseModel):
    success: bool = True
    video: VideoResponse
