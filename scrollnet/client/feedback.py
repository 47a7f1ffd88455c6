"""Feedback submission client.

Validation happens before any network call and is the one failure the user
sees. Once answers are valid the prompt always closes: a store failure is
recorded as "accepted locally" and the cadence resets regardless.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from scrollnet.client.api import ScrollNetAPI
from scrollnet.core.cadence import FeedbackCadenceTracker
from scrollnet.core.errors import InvalidInput, StoreUnavailable
from scrollnet.core.feedback import FeedbackAnswers, validate_answers
from scrollnet.core.identity import Identity, normalize_identity_id
from scrollnet.core.telemetry import LoggingTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    identity: Identity
    video_id: Optional[str]
    answers: FeedbackAnswers
    persisted: bool
    feedback_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def accepted_locally(self) -> bool:
        """True when the prompt closed without server acknowledgement."""
        return not self.persisted


def is_store_video_id(video_id: Optional[str]) -> bool:
    """Placeholder videos carry ids the backend would reject; only UUIDs are store rows."""
    try:
        uuid.UUID(video_id)
    except (TypeError, ValueError, AttributeError):
        return False
    return True


class FeedbackSubmissionClient:
    def __init__(
        self,
        api: ScrollNetAPI,
        tracker: FeedbackCadenceTracker,
        telemetry: Optional[TelemetrySink] = None,
    ):
        self.api = api
        self.tracker = tracker
        self.telemetry = telemetry or LoggingTelemetrySink()

    async def submit(
        self,
        identity: Identity,
        video_id: Optional[str],
        answers: Union[FeedbackAnswers, Mapping[str, Any], None],
    ) -> SubmitResult:
        """
        Submit a completed feedback prompt.

        Raises:
            ValidationError: no answer was given. Nothing is sent and the
                cadence is left untouched so the prompt stays open.
        """
        if identity is None or not identity.id:
            raise InvalidInput("identity is required")
        answers = validate_answers(FeedbackAnswers.coerce(answers))

        body = answers.to_body()
        if is_store_video_id(video_id):
            body["videoId"] = video_id
        elif video_id:
            logger.info(f"Submitting feedback without video target {video_id!r}")
        identity_id = normalize_identity_id(identity.id)
        if identity_id is not None:
            body["identityId"] = identity_id

        try:
            data = await self.api.post_feedback(body)
        except StoreUnavailable as e:
            self.telemetry.emit(
                TelemetryEvent(
                    name="feedback.accepted_locally",
                    error=str(e),
                    context={"video_id": video_id},
                )
            )
            result = SubmitResult(
                identity=identity, video_id=video_id, answers=answers, persisted=False, error=str(e)
            )
        else:
            record = data.get("feedback") or {}
            result = SubmitResult(
                identity=identity,
                video_id=video_id,
                answers=answers,
                persisted=True,
                feedback_id=record.get("id"),
            )
            logger.info(f"Feedback {result.feedback_id} stored for video {video_id}")

        self.tracker.reset(identity)
        return result

    def skip(self, identity: Identity) -> None:
        """Close the prompt without creating a record."""
        self.tracker.reset(identity)
        logger.info(f"Feedback skipped by {identity.id}")

    async def check_required(self, identity: Identity) -> Optional[bool]:
        """Server-side cadence check. None when the backend cannot answer."""
        identity_id = normalize_identity_id(identity.id)
        if identity_id is None:
            return None
        try:
            data = await self.api.get_feedback_required(identity_id)
        except StoreUnavailable as e:
            self.telemetry.emit(TelemetryEvent(name="feedback.required_unknown", error=str(e)))
            return None
        return bool(data.get("feedbackRequired"))
