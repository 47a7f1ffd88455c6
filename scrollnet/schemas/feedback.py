"""Feedback API schemas."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scrollnet.core.feedback import FeedbackAnswers


class FeedbackRequest(BaseModel):
    """Feedback form payload. At least one field must be answered."""

    model_config = ConfigDict(populate_by_name=True)

    identity_id: Optional[str] = Field(None, alias="identityId", max_length=100)
    video_id: Optional[str] = Field(None, alias="videoId", max_length=100)
    rating: Optional[int] = Field(None, ge=1, le=5, description="Overall rating (1-5 stars)")
    categories: Dict[str, int] = Field(default_factory=dict, description="Per-category ratings")
    would_recommend: Optional[bool] = Field(None, alias="wouldRecommend")
    comments: Optional[str] = Field(None, max_length=5000)
    improvement_suggestions: Optional[str] = Field(
        None, alias="improvementSuggestions", max_length=5000
    )
    answers: Dict[str, str] = Field(default_factory=dict, description="Free-form answers")

    @model_validator(mode="after")
    def _require_an_answer(self) -> "FeedbackRequest":
        if not self.to_answers().has_content():
            raise ValueError("At least one feedback answer is required")
        for name, value in self.categories.items():
            if not 0 <= value <= 5:
                raise ValueError(f"Category rating {name} must be between 0 and 5")
        return self

    def to_answers(self) -> FeedbackAnswers:
        return FeedbackAnswers(
            rating=self.rating,
            categories=dict(self.categories),
            would_recommend=self.would_recommend,
            comments=self.comments,
            improvement_suggestions=self.improvement_suggestions,
            answers=dict(self.answers),
        )


class FeedbackRecordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    identity_id: Optional[str] = Field(None, alias="identityId")
    video_id: Optional[str] = Field(None, alias="videoId")
    rating: Optional[int] = None
    categories: Dict[str, int] = Field(default_factory=dict)
    would_recommend: Optional[bool] = Field(None, alias="wouldRecommend")
    comments: Optional[str] = None
    improvement_suggestions: Optional[str] = Field(None, alias="improvementSuggestions")
    answers: Dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(..., alias="createdAt")


class FeedbackResponse(BaseModel):
    success: bool = Field(..., description="Whether feedback was recorded")
    feedback: Optional[FeedbackRecordResponse] = None


class FeedbackRequiredResponse(BaseModel):
    """Server-side cadence check."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    feedback_required: bool = Field(..., alias="feedbackRequired")
    videos_since_feedback: int = Field(..., alias="videosSinceFeedback")
    cadence: int
