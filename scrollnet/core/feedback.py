"""Feedback form answers and their validation."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from scrollnet.core.errors import ValidationError

FEEDBACK_CATEGORIES = ("content_quality", "engagement", "relevance", "technical_quality")


@dataclass(frozen=True)
class FeedbackAnswers:
    """
    Structured ratings plus free-form answers from one feedback prompt.

    Ratings of 0 mean "not answered", matching the form's initial state.
    """

    rating: Optional[int] = None
    categories: Dict[str, int] = field(default_factory=dict)
    would_recommend: Optional[bool] = None
    comments: Optional[str] = None
    improvement_suggestions: Optional[str] = None
    answers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Union["FeedbackAnswers", Mapping[str, Any], None]) -> "FeedbackAnswers":
        """Accept either an instance or a plain {question: answer} mapping."""
        if isinstance(value, FeedbackAnswers):
            return value
        if value is None:
            return cls()
        return cls(answers={str(k): "" if v is None else str(v) for k, v in value.items()})

    def has_content(self) -> bool:
        if self.rating:
            return True
        if any(v for v in self.categories.values()):
            return True
        if self.would_recommend is not None:
            return True
        if (self.comments or "").strip() or (self.improvement_suggestions or "").strip():
            return True
        return any(v.strip() for v in self.answers.values())

    def to_body(self) -> Dict[str, Any]:
        """Wire representation (camelCase, unanswered fields dropped)."""
        body: Dict[str, Any] = {}
        if self.rating:
            body["rating"] = self.rating
        categories = {k: v for k, v in self.categories.items() if v}
        if categories:
            body["categories"] = categories
        if self.would_recommend is not None:
            body["wouldRecommend"] = self.would_recommend
        if (self.comments or "").strip():
            body["comments"] = self.comments.strip()
        if (self.improvement_suggestions or "").strip():
            body["improvementSuggestions"] = self.improvement_suggestions.strip()
        answers = {k: v.strip() for k, v in self.answers.items() if v.strip()}
        if answers:
            body["answers"] = answers
        return body


def validate_answers(answers: FeedbackAnswers) -> FeedbackAnswers:
    """Raise ValidationError unless at least one field was answered."""
    if not answers.has_content():
        raise ValidationError("Please answer at least one question before submitting")
    if answers.rating is not None and answers.rating != 0 and not 1 <= answers.rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    for name, value in answers.categories.items():
        if not 0 <= value <= 5:
            raise ValidationError(f"Category rating {name} must be between 0 and 5")
    return answers
