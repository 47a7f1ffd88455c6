"""Interaction service.

Handles:
- Upsert of like/dislike/emoji/view keyed on (user, video, type)
- Per-video interaction counts
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from scrollnet.core.interactions import InteractionType
from scrollnet.models import UserInteraction

logger = logging.getLogger(__name__)


def build_interaction_upsert(
    user_id: Optional[uuid.UUID],
    video_id: uuid.UUID,
    interaction_type: InteractionType,
    data: Dict[str, Any],
    now: datetime,
):
    """
    INSERT .. ON CONFLICT DO UPDATE on the (user_id, video_id, interaction_type) triple.

    A repeat overwrites payload and timestamp; last writer wins.
    """
    stmt = pg_insert(UserInteraction).values(
        id=uuid.uuid4(),
        user_id=user_id,
        video_id=video_id,
        interaction_type=interaction_type.value,
        interaction_data=data,
        created_at=now,
    )
    return stmt.on_conflict_do_update(
        index_elements=["user_id", "video_id", "interaction_type"],
        set_={
            "interaction_data": stmt.excluded.interaction_data,
            "created_at": stmt.excluded.created_at,
        },
    ).returning(
        UserInteraction.id,
        UserInteraction.user_id,
        UserInteraction.video_id,
        UserInteraction.interaction_type,
        UserInteraction.interaction_data,
        UserInteraction.created_at,
    )


class InteractionService:
    """Service for recording interactions. Concurrency is left to the unique constraint."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_interaction(
        self,
        user_id: Optional[uuid.UUID],
        video_id: uuid.UUID,
        interaction_type: InteractionType,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Upsert one interaction.

        Args:
            user_id: Authenticated or anonymous user UUID, None when unknown
            video_id: Video the interaction is about
            interaction_type: like, dislike, emoji or view
            data: Serialized payload (emoji key, view duration)

        Returns:
            Dict describing the stored row
        """
        now = datetime.now(timezone.utc)
        result = await self.db.execute(
            build_interaction_upsert(user_id, video_id, interaction_type, data or {}, now)
        )
        row = result.one()

        logger.info(f"Recorded {interaction_type.value} on video {video_id} for {user_id}")

        return {
            "id": str(row.id),
            "identity_id": str(row.user_id) if row.user_id else None,
            "video_id": str(row.video_id),
            "type": row.interaction_type,
            "data": row.interaction_data or {},
            "created_at": row.created_at,
        }

    async def get_video_stats(self, video_id: uuid.UUID) -> Dict[str, Any]:
        """Count interactions on one video by type, and emoji reactions by key."""
        emoji_key = UserInteraction.interaction_data["key"].astext
        result = await self.db.execute(
            select(
                UserInteraction.interaction_type,
                emoji_key.label("emoji_key"),
                func.count().label("n"),
            )
            .where(UserInteraction.video_id == video_id)
            .group_by(UserInteraction.interaction_type, emoji_key)
        )

        stats: Dict[str, Any] = {"likes": 0, "dislikes": 0, "views": 0, "emoji": {}, "total": 0}
        for row in result.all():
            stats["total"] += row.n
            if row.interaction_type == InteractionType.LIKE.value:
                stats["likes"] += row.n
            elif row.interaction_type == InteractionType.DISLIKE.value:
                stats["dislikes"] += row.n
            elif row.interaction_type == InteractionType.VIEW.value:
                stats["views"] += row.n
            elif row.interaction_type == InteractionType.EMOJI.value and row.emoji_key:
                stats["emoji"][row.emoji_key] = stats["emoji"].get(row.emoji_key, 0) + row.n
        return stats
