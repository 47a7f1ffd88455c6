"""Feedback form submissions (insert-only)."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from scrollnet.database import Base


class Feedback(Base):
    """One completed feedback prompt."""

    __tablename__ = "feedback"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(UUID(as_uuid=True), nullable=True)
    video_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("videos.id", ondelete="SET NULL"), nullable=True
    )

    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    categories: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True, default=dict)
    would_recommend: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    improvement_suggestions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    answers: Mapped[Optional[dict]] = mapped_column(JSONB, nullable=True, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
        Index("idx_feedback_user_id", user_id),
        Index("idx_feedback_video_id", video_id),
        Index("idx_feedback_user_created", user_id, created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Feedback(video_id={self.video_id}, rating={self.rating})>"
