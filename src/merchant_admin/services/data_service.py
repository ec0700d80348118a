"""Async HTTP client for the back-office CRUD data service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from merchant_admin.errors import DataServiceError

if TYPE_CHECKING:
    from merchant_admin.config import DataServiceConfig

logger = logging.getLogger(__name__)

_FALLBACK_ERROR = "Request failed"


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable ``error`` field out of a failure payload."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = payload.get("error") or payload.get("message")
        if isinstance(message, str) and message:
            return message
    return f"{_FALLBACK_ERROR} ({response.status_code})"


class DataServiceClient:
    """Manages the ``httpx.AsyncClient`` used for resource requests."""

    def __init__(
        self,
        config: DataServiceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the underlying HTTP client."""
        headers = {"Accept": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=headers,
            timeout=self._config.timeout,
            transport=self._transport,
        )
        logger.info("Data service client created — base_url=%s", self._config.base_url)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("DataServiceClient not initialized — call initialize() first")
        return self._client

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body (``None`` when empty)."""
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed — %s", method, path, exc)
            raise DataServiceError(f"Network error: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s returned %s — %s", method, path, response.status_code, message)
            raise DataServiceError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DataServiceError("Malformed response from data service") from exc

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def patch_json(self, path: str, body: dict[str, Any]) -> Any:
        return await self.request("PATCH", path, json=body)

    async def post_json(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, json=body)

    async def upload_file(
        self,
        path: str,
        *,
        filename: str,
        content: bytes,
        content_type: str,
        fields: dict[str, str] | None = None,
    ) -> str:
        """Upload a file as multipart form data and return the stored object's URL."""
        result = await self.request(
            "POST",
            path,
            files={"file": (filename, content, content_type)},
            data=fields or {},
        )
        url = result.get("url") if isinstance(result, dict) else None
        if not isinstance(url, str) or not url:
            raise DataServiceError("Upload response did not include a URL")
        return url
