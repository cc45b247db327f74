"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from ...core.exceptions import ProtocolInconsistency
from .messages import RawResponse, RequestDescriptor
from .transport import RESTTransport

JSON = "application/json"


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST" | "PUT" | "DELETE"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], Any] | None = None
    # Plain-text payload, for endpoints that take a bare string body
    build_data: Callable[[dict[str, Any]], str] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    accept: str = JSON
    # None: derived from the method
    idempotent: bool | None = None


class ResponseAdapter:
    def parse(self, response: Any, params: dict[str, Any]) -> Any:
        return response


def split_href(href: str, url_base: str = "/") -> tuple[str, dict[str, str]]:
    """Split a server-issued continuation link into path and decoded params.

    The link is relative to the server root and starts with the url base
    the client was built with (``/guestAuth/``, ``/httpAuth/`` or ``/``);
    the returned path is relative to that base.

    Args:
        href: Continuation link, e.g. ``/guestAuth/app/rest/builds?locator=...``
        url_base: Authentication url base of the client

    Returns:
        Tuple of (path, query params)
    """
    parts = urlsplit(href)
    path = parts.path
    base = url_base.rstrip("/")
    if base and path.startswith(base + "/"):
        path = path[len(base) :]
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    return path.lstrip("/"), params


class RestRunner:
    def __init__(self, transport: RESTTransport, *, url_base: str = "/") -> None:
        self._t = transport
        self._url_base = url_base

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        body = spec.build_body(params) if spec.build_body else None
        data = spec.build_data(params) if spec.build_data else None
        headers = {"Accept": spec.accept}
        if data is not None:
            headers["Content-Type"] = "text/plain"
        if spec.build_headers:
            headers.update(spec.build_headers(params))

        request = RequestDescriptor(
            spec.method,
            path,
            params=_stringify(query),
            json_body=body,
            data=data,
            headers=headers,
            idempotent=spec.idempotent,
        )
        response = await self._t.execute(request)
        payload = _decode_json(response) if spec.accept == JSON else response.text()
        return adapter.parse(payload, params)

    async def follow(self, href: str, *, adapter: ResponseAdapter, params: dict[str, Any]) -> Any:
        """Fetch a continuation link with GET and parse it with ``adapter``.

        Only the link is sent: the server holds the filter state of the
        original query.
        """
        path, query = split_href(href, self._url_base)
        request = RequestDescriptor("GET", path, params=query, headers={"Accept": JSON})
        response = await self._t.execute(request)
        return adapter.parse(_decode_json(response), params)


def _decode_json(response: RawResponse) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise ProtocolInconsistency(
            f"Response from {response.url} is not valid JSON: {e}"
        ) from e


def _stringify(query: dict[str, Any] | None) -> dict[str, str] | None:
    if not query:
        return None
    return {k: str(v) for k, v in query.items() if v is not None}
