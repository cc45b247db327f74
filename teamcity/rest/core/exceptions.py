"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ids import ResourceId


class TeamCityRestError(Exception):
    """Base exception for all library errors."""

    pass


class TransportFailure(TeamCityRestError):
    """A request could not be completed after the retry policy was exhausted.

    Attributes:
        method: HTTP method of the failed request
        url: Logical target of the request
        status_code: Server status code, None when no response was obtained
        error_body: Server error payload, if any
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int | None = None,
        error_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.error_body = error_body


class ConnectionFailure(TransportFailure):
    """No response was obtained (connection reset, timeout, DNS failure)."""

    pass


class ApplicationFailure(TransportFailure):
    """The server answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int,
        error_body: str | None = None,
    ) -> None:
        super().__init__(
            message,
            method=method,
            url=url,
            status_code=status_code,
            error_body=error_body,
        )


class RemoteFetchError(TeamCityRestError):
    """Hydration of a resource handle failed.

    Raised again, as the very same object, on every later read of the
    handle that needs the full representation.
    """

    def __init__(self, resource_id: ResourceId, cause: TransportFailure) -> None:
        super().__init__(f"Failed to fetch full representation of {resource_id!r}: {cause}")
        self.resource_id = resource_id
        self.cause = cause


class ProtocolInconsistency(TeamCityRestError):
    """Server response violates the client contract (e.g. id mismatch)."""

    pass


class ConfigurationError(TeamCityRestError, ValueError):
    """Invalid client or query configuration, detected before any request."""

    pass
