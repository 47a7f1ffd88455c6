"""Interaction store client.

Persists one classified interaction against one video for one identity.
Writes are upserts on the backend, so repeating a `record` call for the
same (identity, video, type) overwrites instead of duplicating.

Availability over durability: a store failure never reaches the caller.
The result reports `persisted=False` and the failure goes to telemetry.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from scrollnet.client.api import ScrollNetAPI
from scrollnet.core.errors import InvalidInput, StoreUnavailable
from scrollnet.core.identity import Identity, normalize_identity_id
from scrollnet.core.interactions import (
    InteractionEvent,
    InteractionPayload,
    InteractionType,
    parse_type,
    payload_to_data,
    validate_payload,
)
from scrollnet.core.telemetry import LoggingTelemetrySink, TelemetryEvent, TelemetrySink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordResult:
    """Outcome of a record call. The event counts as recorded either way."""

    event: InteractionEvent
    persisted: bool
    interaction_id: Optional[str] = None
    error: Optional[str] = None


class InteractionStoreClient:
    def __init__(self, api: ScrollNetAPI, telemetry: Optional[TelemetrySink] = None):
        self.api = api
        self.telemetry = telemetry or LoggingTelemetrySink()

    async def record(
        self,
        identity: Identity,
        video_id: str,
        type_: Union[str, InteractionType],
        payload: InteractionPayload = None,
    ) -> RecordResult:
        """
        Record one interaction.

        Raises:
            InvalidInput: missing identity or video, unknown type, or a payload
                that does not match the type. Nothing is sent in that case.
        """
        if identity is None or not identity.id:
            raise InvalidInput("identity is required")
        if not video_id:
            raise InvalidInput("video_id is required")
        interaction_type = parse_type(type_)
        validate_payload(interaction_type, payload)

        event = InteractionEvent(
            identity=identity, video_id=video_id, type=interaction_type, payload=payload
        )

        body = {"videoId": video_id, "type": interaction_type.value, "data": payload_to_data(payload)}
        identity_id = normalize_identity_id(identity.id)
        if identity_id is not None:
            body["identityId"] = identity_id

        try:
            data = await self.api.post_interaction(body)
        except StoreUnavailable as e:
            self.telemetry.emit(
                TelemetryEvent(
                    name="interaction.not_persisted",
                    error=str(e),
                    context={"video_id": video_id, "type": interaction_type.value},
                )
            )
            return RecordResult(event=event, persisted=False, error=str(e))

        interaction = data.get("interaction") or {}
        logger.debug(f"Recorded {interaction_type.value} on {video_id}")
        return RecordResult(event=event, persisted=True, interaction_id=interaction.get("id"))
