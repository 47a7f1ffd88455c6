"""Session identity resolution.

The acting identity for an interaction is either the authenticated user
supplied by the auth provider, or an anonymous UUID-v4 generated once per
session. The anonymous id must stay stable for the whole session so the
store's per (identity, video, type) uniqueness keeps suppressing duplicates.
"""

import logging
import re
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from scrollnet.core.errors import IdentityResolutionFailure

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
_UUID4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)


def is_uuid(value: Optional[str]) -> bool:
    """True for canonical RFC 4122 UUID strings (versions 1-5)."""
    return bool(value) and isinstance(value, str) and bool(_UUID_RE.match(value))


def is_uuid4(value: Optional[str]) -> bool:
    return bool(value) and isinstance(value, str) and bool(_UUID4_RE.match(value))


class IdentityKind(str, Enum):
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class Identity:
    """Acting principal for an interaction."""

    id: str
    kind: IdentityKind

    @classmethod
    def authenticated(cls, user_id: str) -> "Identity":
        return cls(id=user_id, kind=IdentityKind.AUTHENTICATED)

    @classmethod
    def anonymous(cls, anonymous_id: str) -> "Identity":
        return cls(id=anonymous_id, kind=IdentityKind.ANONYMOUS)

    @property
    def is_anonymous(self) -> bool:
        return self.kind is IdentityKind.ANONYMOUS


@dataclass(frozen=True)
class AuthenticatedUser:
    """What the external auth provider hands us for a signed-in user."""

    id: str
    token: Optional[str] = None
    email: Optional[str] = None


class AuthProvider(Protocol):
    """External auth collaborator. Login and OAuth live elsewhere."""

    def get_current_user(self) -> Optional[AuthenticatedUser]:
        ...


class NoAuthProvider:
    """Auth provider for sessions that never sign in."""

    def get_current_user(self) -> Optional[AuthenticatedUser]:
        return None


class StaticAuthProvider:
    """Auth provider holding a user set by the login flow."""

    def __init__(self, user: Optional[AuthenticatedUser] = None):
        self.user = user

    def sign_in(self, user: AuthenticatedUser) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None

    def get_current_user(self) -> Optional[AuthenticatedUser]:
        return self.user


def generate_anonymous_id() -> str:
    return str(uuid.uuid4())


class SessionIdentityResolver:
    """
    Resolve the acting identity for one client session.

    Thread-safe: anonymous id generation is single-flight behind a lock, so
    concurrent interaction sites in the same session never see two ids.
    """

    def __init__(
        self,
        auth_provider: Optional[AuthProvider] = None,
        id_factory: Callable[[], str] = generate_anonymous_id,
    ):
        self.auth_provider = auth_provider or NoAuthProvider()
        self._id_factory = id_factory
        self._anonymous_id: Optional[str] = None
        self._lock = threading.Lock()

    def resolve(self) -> Identity:
        """Return the authenticated identity if present, else the session's anonymous one."""
        user = self.auth_provider.get_current_user()
        if user is not None and user.id:
            return Identity.authenticated(user.id)
        return Identity.anonymous(self._anonymous())

    def _anonymous(self) -> str:
        cached = self._anonymous_id
        if cached is not None and is_uuid4(cached):
            return cached

        with self._lock:
            if self._anonymous_id is not None and not is_uuid4(self._anonymous_id):
                failure = IdentityResolutionFailure(
                    f"Anonymous id {self._anonymous_id!r} is corrupt, regenerating"
                )
                logger.warning(str(failure))
                self._anonymous_id = None

            if self._anonymous_id is None:
                candidate = self._id_factory()
                if not is_uuid4(candidate):
                    logger.warning(f"Anonymous id factory returned {candidate!r}, using uuid4")
                    candidate = generate_anonymous_id()
                self._anonymous_id = candidate
                logger.info(f"Generated anonymous session id {candidate}")
            return self._anonymous_id

    @property
    def anonymous_id(self) -> Optional[str]:
        return self._anonymous_id

    def end_session(self) -> None:
        """Forget the anonymous id; the next session gets a fresh one."""
        with self._lock:
            self._anonymous_id = None


def normalize_identity_id(identity_id: Optional[str]) -> Optional[str]:
    """
    Map an identity id onto what the store accepts.

    Store identity columns are UUIDs that accept null for "no known user".
    Anything else (placeholder ids such as "anonymous-user") becomes None.
    """
    if identity_id is None:
        return None
    if is_uuid(identity_id):
        return identity_id.lower()
    logger.warning(f"Identity id {identity_id!r} is not a UUID, storing as unknown user")
    return None
