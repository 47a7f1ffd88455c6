"""Feedback service.

Handles:
- Insert-only feedback records
- Server-side cadence check (views since the last feedback)
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scrollnet.config import get_settings
from scrollnet.core.feedback import FeedbackAnswers
from scrollnet.core.interactions import InteractionType
from scrollnet.models import Feedback, UserInteraction

logger = logging.getLogger(__name__)
settings = get_settings()


class FeedbackService:
    """Service for storing feedback and answering the cadence check."""

    def __init__(self, db: AsyncSession, cadence: Optional[int] = None):
        self.db = db
        self.cadence = cadence or settings.feedback_cadence

    async def submit_feedback(
        self,
        user_id: Optional[uuid.UUID],
        video_id: Optional[uuid.UUID],
        answers: FeedbackAnswers,
    ) -> Feedback:
        """Insert one feedback record. Never updates an earlier one."""
        feedback = Feedback(
            user_id=user_id,
            video_id=video_id,
            rating=answers.rating or None,
            categories={k: v for k, v in answers.categories.items() if v},
            would_recommend=answers.would_recommend,
            comments=(answers.comments or "").strip() or None,
            improvement_suggestions=(answers.improvement_suggestions or "").strip() or None,
            answers={k: v for k, v in answers.answers.items() if v.strip()},
        )
        self.db.add(feedback)
        await self.db.flush()
        await self.db.refresh(feedback)

        logger.info(f"Stored feedback {feedback.id} on video {video_id} from {user_id}")
        return feedback

    async def videos_since_feedback(self, user_id: uuid.UUID) -> int:
        """Distinct videos viewed after the most recent feedback from this user."""
        last_feedback = await self.db.scalar(
            select(func.max(Feedback.created_at)).where(Feedback.user_id == user_id)
        )

        query = select(func.count(func.distinct(UserInteraction.video_id))).where(
            UserInteraction.user_id == user_id,
            UserInteraction.interaction_type == InteractionType.VIEW.value,
        )
        if last_feedback is not None:
            query = query.where(UserInteraction.created_at > last_feedback)

        return int(await self.db.scalar(query) or 0)

    async def is_feedback_required(self, user_id: Optional[uuid.UUID]) -> tuple:
        """Return (required, videos_since_feedback)."""
        if user_id is None:
            return False, 0
        count = await self.videos_since_feedback(user_id)
        return count >= self.cadence, count
