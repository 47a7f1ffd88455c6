"""Error taxonomy for the interaction pipeline."""

from typing import Optional


class ScrollNetError(Exception):
    """Base class for pipeline errors."""


class InvalidInput(ScrollNetError, ValueError):
    """Malformed interaction or feedback input. Never reaches the store."""


class ValidationError(InvalidInput):
    """Feedback answers missing. The one user-visible failure."""


class IdentityResolutionFailure(ScrollNetError):
    """Anonymous identity was missing or corrupt and had to be regenerated."""


class StoreUnavailable(ScrollNetError):
    """Backend answered with an error or a false success flag."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(StoreUnavailable):
    """Backend could not be reached at all."""
