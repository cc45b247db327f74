"""HTTP client helper."""

from __future__ import annotations

from collections.abc import Mapping

import aiohttp

from ... import config
from .messages import RawResponse, RequestDescriptor


class HTTPClient:
    """Async HTTP client wrapper performing exactly one exchange per call."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = config.DEFAULT_TIMEOUT,
        *,
        headers: Mapping[str, str] | None = None,
        max_connections: int = config.DEFAULT_MAX_CONCURRENT_REQUESTS,
        max_connections_per_host: int = config.DEFAULT_MAX_CONCURRENT_REQUESTS_PER_HOST,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = dict(headers or {})
        self._max_connections = max_connections
        self._max_connections_per_host = max_connections_per_host
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self._max_connections,
                limit_per_host=self._max_connections_per_host,
            )
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers=self._headers,
                connector=connector,
            )
        return self._session

    def resolve_url(self, path: str) -> str:
        """Combine ``base_url`` with a relative path."""
        if path.startswith(("http://", "https://")) or not self.base_url:
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def execute(self, request: RequestDescriptor) -> RawResponse:
        """Perform one request/response exchange.

        Non-success statuses are returned, not raised: classification is
        the transport's job. Connection-level faults propagate as aiohttp
        or OS exceptions.
        """
        url = self.resolve_url(request.path)
        kwargs: dict = {
            "params": dict(request.params) if request.params else None,
            "headers": dict(request.headers) if request.headers else None,
        }
        if request.json_body is not None:
            kwargs["json"] = request.json_body
        elif request.data is not None:
            kwargs["data"] = request.data.encode("utf-8")

        async with self.session.request(request.method, url, **kwargs) as response:
            body = await response.read()
            return RawResponse(
                status=response.status,
                url=str(response.url),
                body=body,
                headers=dict(response.headers),
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
