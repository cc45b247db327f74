"""Structured logging for transport, pagination and hydration.

Every helper emits one event-named record with structured ``extra`` fields.
Components receive an optional logger at construction time and pass it
here; when none is given the module logger is used.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def _sink(log: logging.Logger | None) -> logging.Logger:
    return log if log is not None else logger


def log_request_retry(
    *,
    method: str,
    url: str,
    attempt: int,
    delay: float,
    status_code: int | None = None,
    error: BaseException | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log a failed attempt that is about to be retried.

    Args:
        method: HTTP method
        url: Request target
        attempt: One-based number of the attempt that failed
        delay: Seconds to wait before the next attempt
        status_code: Response status, None for connection-level faults
        error: Connection-level exception, if any
        log: Optional diagnostics sink
    """
    _sink(log).warning(
        "request_retry",
        extra={
            "method": method,
            "url": url,
            "attempt": attempt,
            "delay_s": delay,
            "status_code": status_code,
            "error_type": type(error).__name__ if error is not None else None,
            "error_message": str(error) if error is not None else None,
        },
    )


def log_request_failed(
    *,
    method: str,
    url: str,
    attempts: int,
    status_code: int | None = None,
    error: BaseException | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log a request that failed for good."""
    _sink(log).error(
        "request_failed",
        extra={
            "method": method,
            "url": url,
            "attempts": attempts,
            "status_code": status_code,
            "error_type": type(error).__name__ if error is not None else None,
        },
    )


def log_page_fetched(
    *,
    page_index: int,
    items: int,
    has_next: bool,
    latency_ms: float | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log one page of a lazy traversal.

    Args:
        page_index: Zero-based index of the page within the traversal
        items: Number of items on the page
        has_next: Whether the server returned a continuation link
        latency_ms: Fetch and decode latency in milliseconds (optional)
        log: Optional diagnostics sink
    """
    _sink(log).debug(
        "page_fetched",
        extra={
            "page_index": page_index,
            "items": items,
            "has_next": has_next,
            "latency_ms": latency_ms,
        },
    )


def log_traversal_complete(
    *, pages: int, items: int, log: logging.Logger | None = None
) -> None:
    _sink(log).debug("traversal_complete", extra={"pages": pages, "items": items})


def log_hydration(
    *,
    resource: str,
    resource_id: str,
    outcome: str,
    latency_ms: float | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log the single full fetch of a resource handle.

    Args:
        resource: Resource kind (e.g. "Build")
        resource_id: Identifier of the handle
        outcome: "ok" or the error type name
        latency_ms: Latency in milliseconds (optional)
        log: Optional diagnostics sink
    """
    level = logging.DEBUG if outcome == "ok" else logging.WARNING
    _sink(log).log(
        level,
        "resource_hydrated",
        extra={
            "resource": resource,
            "resource_id": resource_id,
            "outcome": outcome,
            "latency_ms": latency_ms,
        },
    )


def log_query(*, resource: str, locator: str | None, log: logging.Logger | None = None) -> None:
    """Log the locator a traversal starts with."""
    extra: dict[str, Any] = {"resource": resource, "locator": locator}
    _sink(log).debug("query_started", extra=extra)
