"""Core session logic: gestures, identity, interactions, cadence."""

from scrollnet.core.cadence import CadenceSignal, FeedbackCadenceTracker
from scrollnet.core.errors import (
    IdentityResolutionFailure,
    InvalidInput,
    NetworkError,
    ScrollNetError,
    StoreUnavailable,
    ValidationError,
)
from scrollnet.core.gestures import EMOJI_REACTIONS, Classification, Gesture, classify, classify_emoji
from scrollnet.core.identity import (
    AuthenticatedUser,
    AuthProvider,
    Identity,
    IdentityKind,
    NoAuthProvider,
    SessionIdentityResolver,
    StaticAuthProvider,
)
from scrollnet.core.interactions import (
    EmojiPayload,
    InteractionEvent,
    InteractionType,
    ViewPayload,
)
from scrollnet.core.telemetry import LoggingTelemetrySink, TelemetryEvent

__all__ = [
    "CadenceSignal",
    "FeedbackCadenceTracker",
    "ScrollNetError",
    "InvalidInput",
    "ValidationError",
    "IdentityResolutionFailure",
    "StoreUnavailable",
    "NetworkError",
    "EMOJI_REACTIONS",
    "Classification",
    "Gesture",
    "classify",
    "classify_emoji",
    "AuthenticatedUser",
    "AuthProvider",
    "Identity",
    "IdentityKind",
    "NoAuthProvider",
    "SessionIdentityResolver",
    "StaticAuthProvider",
    "EmojiPayload",
    "InteractionEvent",
    "InteractionType",
    "ViewPayload",
    "LoggingTelemetrySink",
    "TelemetryEvent",
]
