"""HTTP client for the ScrollNet backend.

Every backend response carries a `success` flag. Transport errors become
NetworkError; non-2xx responses and `success: false` become StoreUnavailable.
Only feed reads are retried; writes fail fast and are reported as soft failures.
Callers decide whether those are soft failures.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from scrollnet.config import get_settings
from scrollnet.core.errors import NetworkError, StoreUnavailable

logger = logging.getLogger(__name__)


class ScrollNetAPI:
    """Thin async wrapper over the four endpoints the session pipeline needs."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        token: Optional[str] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else None
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.request_timeout,
            headers=headers,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            detail = data.get("detail") if isinstance(data, dict) else response.text[:200]
            raise StoreUnavailable(
                f"{method} {path} returned {response.status_code}: {detail}",
                status_code=response.status_code,
            )
        if not isinstance(data, dict) or data.get("success") is not True:
            raise StoreUnavailable(
                f"{method} {path} did not report success", status_code=response.status_code
            )
        return data

    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        reraise=True,
    )
    async def get_videos(self, limit: int, offset: int) -> Dict[str, Any]:
        """Fetch one feed page, retrying transport errors."""
        return await self._request("GET", "/videos", params={"limit": limit, "offset": offset})

    async def post_interaction(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/interactions", json=body)

    async def post_feedback(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/feedback", json=body)

    async def get_feedback_required(self, identity_id: Optional[str]) -> Dict[str, Any]:
        params = {"identityId": identity_id} if identity_id else {}
        return await self._request("GET", "/feedback/required", params=params)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
