"""Retry-wrapped REST transport."""

from __future__ import annotations

import logging
import random
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ... import config
from .http_client import HTTPClient
from .messages import RawResponse, RequestDescriptor
from .retry import RetryPolicy, execute_with_retry


class RESTTransport:
    """Executes logical requests with the client's retry policy.

    The transport knows nothing about entities: it turns a
    ``RequestDescriptor`` into a successful ``RawResponse`` or raises a
    ``TransportFailure``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        timeout: float = config.DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        http_client: HTTPClient | None = None,
        sleep: Callable[[float], Awaitable[object]] | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._http = http_client or HTTPClient(base_url=base_url, timeout=timeout, headers=headers)
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._rng = rng
        self._log = logger

    async def execute(self, request: RequestDescriptor) -> RawResponse:
        kwargs: dict[str, Any] = {}
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return await execute_with_retry(
            self._http.execute,
            request,
            self.retry_policy,
            target=self._http.resolve_url(request.path),
            rng=self._rng,
            log=self._log,
            **kwargs,
        )

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET ``path`` and decode the JSON body."""
        request = RequestDescriptor(
            "GET", path, params=params, headers={"Accept": "application/json", **(headers or {})}
        )
        response = await self.execute(request)
        return response.json()

    async def post(
        self,
        path: str,
        *,
        json_body: Any = None,
        data: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        return await self.execute(
            RequestDescriptor("POST", path, json_body=json_body, data=data, headers=headers)
        )

    async def put(
        self,
        path: str,
        *,
        json_body: Any = None,
        data: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RawResponse:
        return await self.execute(
            RequestDescriptor("PUT", path, json_body=json_body, data=data, headers=headers)
        )

    async def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> RawResponse:
        return await self.execute(RequestDescriptor("DELETE", path, headers=headers))

    async def close(self) -> None:
        await self._http.close()
