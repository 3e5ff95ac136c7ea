"""HTTP gateway to the Verse Point backend.

Translates calls into httpx requests and backend failures into ``ApiError``.
Attaches the bearer token when one exists. Never retries.
"""

import io
import logging
from collections.abc import Callable
from typing import Any

import httpx

from versepoint.config import ClientConfig
from versepoint.errors import ApiError, NetworkError
from versepoint.models.schemas import LocalFile

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]
ProgressCallback = Callable[[int], None]

# Progress stays below this until the backend confirms the upload
MAX_PROGRESS_BEFORE_RESPONSE = 90
PROGRESS_STEP = 10


class ProgressReader(io.BytesIO):
    """File body that reports how much of itself the transport has read.

    Reports coarse percentages in ``PROGRESS_STEP`` ticks, capped at
    ``MAX_PROGRESS_BEFORE_RESPONSE``.
    """

    def __init__(self, content: bytes, on_progress: ProgressCallback) -> None:
        super().__init__(content)
        self._total = len(content)
        self._on_progress = on_progress
        self._reported = 0

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        if self._total:
            percent = self.tell() * 100 // self._total
            tick = min(
                percent - percent % PROGRESS_STEP,
                MAX_PROGRESS_BEFORE_RESPONSE,
            )
            if tick > self._reported:
                self._reported = tick
                self._on_progress(tick)
        return chunk


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the backend's error text out of a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return fallback
    if isinstance(payload, dict):
        for field in ("error", "message", "detail"):
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
    return fallback


class ApiGateway:
    """Thin async client for the backend REST API.

    Owns its ``httpx.AsyncClient`` unless one is injected.
    """

    def __init__(
        self,
        config: ClientConfig,
        token_provider: TokenProvider,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Client configuration (base URL, timeout).
            token_provider: Returns the current auth token, or None.
            client: Optional preconfigured client, e.g. with a test transport.
        """
        self._config = config
        self._token_provider = token_provider
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.request_timeout)

    def _url(self, path: str) -> str:
        return f"{self._config.api_base_url}/{path.lstrip('/')}"

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a JSON request.

        Args:
            path: Endpoint path relative to the API base URL.
            method: HTTP method.
            body: JSON body, if any.

        Returns:
            Decoded JSON object from the response.

        Raises:
            ApiError: Non-2xx response or undecodable body.
            NetworkError: The backend could not be reached.
        """
        return await self._send(
            method,
            path,
            fallback="API request failed",
            headers={"Content-Type": "application/json", **self._auth_headers()},
            json=body,
        )

    async def upload(
        self,
        path: str,
        file: LocalFile,
        on_progress: ProgressCallback | None = None,
    ) -> dict[str, Any]:
        """Upload one file as multipart form data in the ``file`` field.

        Args:
            path: Endpoint path relative to the API base URL.
            file: File to send.
            on_progress: Receives coarse progress percentages while sending.

        Returns:
            Decoded JSON object from the response.

        Raises:
            ApiError: Non-2xx response or undecodable body.
            NetworkError: The backend could not be reached.
        """
        body = (
            ProgressReader(file.content, on_progress)
            if on_progress
            else io.BytesIO(file.content)
        )
        content_type = file.content_type or "application/octet-stream"
        return await self._send(
            "POST",
            path,
            fallback="Upload failed",
            headers=self._auth_headers(),
            files={"file": (file.name, body, content_type)},
        )

    async def _send(
        self,
        method: str,
        path: str,
        fallback: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        url = self._url(path)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed to reach backend: {e}")
            raise NetworkError(f"Could not reach server: {e}") from e

        if not response.is_success:
            message = _error_message(response, fallback)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Invalid JSON in server response") from e
        if not isinstance(payload, dict):
            raise ApiError(response.status_code, "Unexpected server response")

        logger.debug(f"{method} {path} -> {response.status_code}")
        return payload

    async def aclose(self) -> None:
        """Close the underlying client if the gateway created it."""
        if self._owns_client:
            await self._client.aclose()
