"""Request and response value objects exchanged with the HTTP layer."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


@dataclass(frozen=True)
class RequestDescriptor:
    """One logical request.

    Attributes:
        method: HTTP method, upper case
        path: Path relative to the client base url, or an absolute url
        params: Query parameters (sent url-encoded)
        json_body: JSON payload, mutually exclusive with ``data``
        data: Raw text payload (``text/plain`` bodies)
        headers: Extra request headers
        idempotent: Whether repeating the request is safe. Derived from the
            method unless given explicitly.
    """

    method: str
    path: str
    params: Mapping[str, str] | None = None
    json_body: Any = None
    data: str | None = None
    headers: Mapping[str, str] | None = None
    idempotent: bool | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        object.__setattr__(self, "method", method)
        if self.idempotent is None:
            object.__setattr__(self, "idempotent", method in IDEMPOTENT_METHODS)
        if self.json_body is not None and self.data is not None:
            raise ValueError("json_body and data are mutually exclusive")


@dataclass(frozen=True)
class RawResponse:
    """Undecoded server response."""

    status: int
    url: str
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        if not self.body:
            return None
        return json.loads(self.body)
