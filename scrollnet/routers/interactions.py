"""Interaction router.

POST /interactions upserts one like/dislike/emoji/view per
(identity, video, type). Emoji reactions overwrite the previous emoji.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from scrollnet.core.errors import InvalidInput
from scrollnet.core.interactions import parse_type, payload_from_data, payload_to_data, validate_payload
from scrollnet.routers.deps import get_interaction_service, parse_identity_id, parse_video_id
from scrollnet.schemas.interaction import (
    InteractionRecord,
    InteractionRequest,
    InteractionResponse,
    VideoStatsResponse,
)
from scrollnet.services import InteractionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/interactions", tags=["interactions"])


@router.post("", response_model=InteractionResponse)
async def record_interaction(
    request: InteractionRequest,
    service: InteractionService = Depends(get_interaction_service),
):
    """
    Record a user interaction.

    A repeat of the same type by the same identity on the same video
    overwrites the stored payload and timestamp instead of adding a row.
    """
    video_id = parse_video_id(request.video_id)
    user_id = parse_identity_id(request.identity_id)
    interaction_type = parse_type(request.type)

    try:
        payload = payload_from_data(interaction_type, request.data)
        validate_payload(interaction_type, payload)
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        row = await service.record_interaction(
            user_id=user_id,
            video_id=video_id,
            interaction_type=interaction_type,
            data=payload_to_data(payload),
        )
    except Exception as e:
        logger.error(f"Failed to record interaction: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to record interaction: {str(e)}",
        )

    return InteractionResponse(success=True, interaction=InteractionRecord(**row))


@router.get("/stats/{video_id}", response_model=VideoStatsResponse)
async def get_video_stats(
    video_id: str,
    service: InteractionService = Depends(get_interaction_service),
):
    """Get interaction counts for a video."""
    stats = await service.get_video_stats(parse_video_id(video_id))
    return VideoStatsResponse(video_id=video_id, **stats)
