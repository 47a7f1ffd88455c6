"""User interaction model (one row per user, video and interaction type)."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from scrollnet.database import Base


class UserInteraction(Base):
    """Like / dislike / emoji / view against a video. Repeats update in place."""

    __tablename__ = "user_interactions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Null means "no known user"
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), nullable=True)
    video_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )

    interaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    interaction_data: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "video_id", "interaction_type", name="uq_user_interactions_user_video_type"
        ),
        Index("idx_user_interactions_user_video", user_id, video_id),
        Index("idx_user_interactions_type", interaction_type),
        Index("idx_user_interactions_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<UserInteraction(video_id={self.video_id}, type={self.interaction_type})>"
