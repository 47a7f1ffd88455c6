"""Shared router dependencies."""

import uuid
from typing import Optional

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from scrollnet.core.identity import normalize_identity_id
from scrollnet.database import get_db
from scrollnet.services import FeedbackService, InteractionService, VideoService


def get_video_service(db: AsyncSession = Depends(get_db)) -> VideoService:
    return VideoService(db)


def get_interaction_service(db: AsyncSession = Depends(get_db)) -> InteractionService:
    return InteractionService(db)


def get_feedback_service(db: AsyncSession = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)


def parse_video_id(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=422,
            detail=f"videoId must be a UUID, got {value!r}",
        ) from None


def parse_identity_id(value: Optional[str]) -> Optional[uuid.UUID]:
    """Non-UUID identities are stored as unknown (null) rather than rejected."""
    normalized = normalize_identity_id(value)
    return uuid.UUID(normalized) if normalized else None
