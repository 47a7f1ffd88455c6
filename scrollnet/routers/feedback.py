"""Feedback router.

POST /feedback stores one feedback record (insert-only).
GET /feedback/required answers the server-side cadence check.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from scrollnet.routers.deps import get_feedback_service, parse_identity_id, parse_video_id
from scrollnet.schemas.feedback import (
    FeedbackRecordResponse,
    FeedbackRequest,
    FeedbackRequiredResponse,
    FeedbackResponse,
)
from scrollnet.services import FeedbackService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=FeedbackResponse)
async def submit_feedback(
    request: FeedbackRequest,
    service: FeedbackService = Depends(get_feedback_service),
):
    """
    Submit feedback for a video.

    Requests with no answered field are rejected with 422. Several
    submissions for the same identity and video are all kept.
    """
    video_id = parse_video_id(request.video_id) if request.video_id else None
    user_id = parse_identity_id(request.identity_id)

    try:
        feedback = await service.submit_feedback(
            user_id=user_id,
            video_id=video_id,
            answers=request.to_answers(),
        )
    except Exception as e:
        logger.error(f"Failed to store feedback: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store feedback: {str(e)}",
        )

    return FeedbackResponse(
        success=True,
        feedback=FeedbackRecordResponse(
            id=str(feedback.id),
            identity_id=str(feedback.user_id) if feedback.user_id else None,
            video_id=str(feedback.video_id) if feedback.video_id else None,
            rating=feedback.rating,
            categories=feedback.categories or {},
            would_recommend=feedback.would_recommend,
            comments=feedback.comments,
            improvement_suggestions=feedback.improvement_suggestions,
            answers=feedback.answers or {},
            created_at=feedback.created_at,
        ),
    )


@router.get("/required", response_model=FeedbackRequiredResponse)
async def feedback_required(
    identity_id: Optional[str] = Query(None, alias="identityId"),
    service: FeedbackService = Depends(get_feedback_service),
):
    """Whether the identity has viewed a full cadence of videos since its last feedback."""
    required, count = await service.is_feedback_required(parse_identity_id(identity_id))
    return FeedbackRequiredResponse(
        feedback_required=required,
        videos_since_feedback=count,
        cadence=service.cadence,
    )
