"""Interaction API schemas."""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class InteractionRequest(BaseModel):
    """Interaction payload; upserted per (identity, video, type)."""

    model_config = ConfigDict(populate_by_name=True)

    identity_id: Optional[str] = Field(
        None, alias="identityId", max_length=100, description="User or anonymous session UUID"
    )
    video_id: str = Field(..., alias="videoId", min_length=1, max_length=100)
    type: Literal["like", "dislike", "emoji", "view"] = Field(..., description="Interaction type")
    data: Optional[Dict[str, Any]] = Field(
        None, description="Emoji {key} or view {durationMs}; empty for like/dislike"
    )


class InteractionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    identity_id: Optional[str] = Field(None, alias="identityId")
    video_id: str = Field(..., alias="videoId")
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(..., alias="createdAt")


class InteractionResponse(BaseModel):
    success: bool = Field(..., description="Whether the interaction was stored")
    interaction: Optional[InteractionRecord] = None


class VideoStatsResponse(BaseModel):
    """Per-video interaction counts."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    video_id: str = Field(..., alias="videoId")
    likes: int = 0
    dislikes: int = 0
    views: int = 0
    emoji: Dict[str, int] = Field(default_factory=dict)
    total: int = 0
