"""Bounded retry with exponential backoff for idempotent requests.

Architecture:
    ``RetryPolicy`` is an immutable value shared by every request of one
    client. The retry decision (is this outcome retryable, what is the next
    delay, which failure to raise once attempts run out) lives in
    ``_RetryRun`` and is shared by two thin loops:
    - ``execute_with_retry``: cooperative model, awaits the send and sleeps
      with ``asyncio.sleep``
    - ``execute_with_retry_blocking``: thread model, calls the send and
      sleeps with ``time.sleep``

Design Decisions:
    - Only idempotent requests are retried. A state-mutating request may
      already have taken effect server-side when its response was lost.
    - The last retryable response is surfaced as ``ApplicationFailure``,
      the last exception as ``ConnectionFailure``.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass

import aiohttp

from ... import config
from ...core.exceptions import ApplicationFailure, ConfigurationError, ConnectionFailure
from ..telemetry import log_request_failed, log_request_retry
from .messages import RawResponse, RequestDescriptor

# Request timeout, rate limited, and the transient 5xx family
RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})

CONNECTION_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy for one client instance.

    Attributes:
        max_attempts: Total attempts including the first one (>= 1)
        initial_delay: Delay before the first retry, in seconds (>= 0)
        max_delay: Cap applied before jitter, in seconds (>= initial_delay)
        backoff_factor: Multiplier applied to the delay after each retry
        jitter_ratio: Symmetric random jitter as a fraction of the delay, in [0, 1)
    """

    max_attempts: int = config.DEFAULT_RETRY_MAX_ATTEMPTS
    initial_delay: float = config.DEFAULT_RETRY_INITIAL_DELAY
    max_delay: float = config.DEFAULT_RETRY_MAX_DELAY
    backoff_factor: float = config.DEFAULT_RETRY_BACKOFF_FACTOR
    jitter_ratio: float = config.DEFAULT_RETRY_JITTER_RATIO

    def __post_init__(self) -> None:
        """Validate retry policy configuration."""
        if self.max_attempts < 1:
            raise ConfigurationError("At least one attempt must be configured")
        if self.initial_delay < 0:
            raise ConfigurationError("Retry delay cannot be negative")
        if self.max_delay < self.initial_delay:
            raise ConfigurationError("max_delay must be greater or equal to initial_delay")
        if self.backoff_factor < 1:
            raise ConfigurationError("backoff_factor must be >= 1")
        if not 0 <= self.jitter_ratio < 1:
            raise ConfigurationError("jitter_ratio must be in [0, 1)")

    @classmethod
    def no_retry(cls) -> RetryPolicy:
        return cls(max_attempts=1, initial_delay=0.0, max_delay=0.0)

    def delays(self, rng: random.Random | None = None) -> Iterator[float]:
        """Yield the delay to sleep before each successive retry.

        The first delay is ``initial_delay``. Each following one is
        ``min(previous * backoff_factor, max_delay)`` plus a uniform jitter
        of up to ``jitter_ratio`` of that value in either direction.

        Args:
            rng: Random source, module-level ``random`` if omitted

        Yields:
            Delay in seconds
        """
        source = rng if rng is not None else random
        delay = self.initial_delay
        while True:
            yield delay
            raw = min(delay * self.backoff_factor, self.max_delay)
            # (2 * random() - 1) is uniform in [-1, 1)
            jitter = (2 * source.random() - 1) * raw * self.jitter_ratio
            delay = raw + jitter


def is_retryable_status(status: int) -> bool:
    return status in RETRYABLE_STATUSES


def application_failure(request: RequestDescriptor, response: RawResponse) -> ApplicationFailure:
    """Build the failure raised for a non-success response."""
    body = response.text() or None
    suffix = f", error: {body}" if body else ""
    return ApplicationFailure(
        f"Request {request.method} {response.url} failed, code {response.status}{suffix}",
        method=request.method,
        url=response.url,
        status_code=response.status,
        error_body=body,
    )


class _RetryRun:
    """Attempt bookkeeping for one logical request."""

    def __init__(
        self,
        request: RequestDescriptor,
        policy: RetryPolicy,
        *,
        target: str,
        rng: random.Random | None,
        log: logging.Logger | None,
    ) -> None:
        self.request = request
        self.policy = policy
        self.target = target
        self.attempt = 1
        self._delays = policy.delays(rng)
        self._log = log

    def next_delay(self, response: RawResponse | None, error: BaseException | None) -> float:
        """Return the delay before the next attempt, or raise the final failure.

        Must only be called when the attempt did not produce a usable
        response, i.e. ``response`` is retryable or ``error`` is set.
        """
        request = self.request
        retryable = request.idempotent and (
            error is not None or (response is not None and is_retryable_status(response.status))
        )
        if not retryable or self.attempt >= self.policy.max_attempts:
            log_request_failed(
                method=request.method,
                url=response.url if response is not None else self.target,
                attempts=self.attempt,
                status_code=response.status if response is not None else None,
                error=error,
                log=self._log,
            )
            if response is not None:
                raise application_failure(request, response)
            raise ConnectionFailure(
                f"Request {request.method} {self.target} failed, tried {self.attempt} times: {error}",
                method=request.method,
                url=self.target,
            ) from error

        delay = next(self._delays)
        log_request_retry(
            method=request.method,
            url=response.url if response is not None else self.target,
            attempt=self.attempt,
            delay=delay,
            status_code=response.status if response is not None else None,
            error=error,
            log=self._log,
        )
        self.attempt += 1
        return delay


async def execute_with_retry(
    send: Callable[[RequestDescriptor], Awaitable[RawResponse]],
    request: RequestDescriptor,
    policy: RetryPolicy,
    *,
    target: str | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    rng: random.Random | None = None,
    log: logging.Logger | None = None,
) -> RawResponse:
    """Execute ``request`` through ``send`` with bounded retries.

    Args:
        send: Performs one HTTP exchange; raises on connection faults
        request: Request to execute
        policy: Retry policy
        target: Logical target used in failures (defaults to request path)
        sleep: Coroutine used for inter-retry delays
        rng: Random source for jitter
        log: Optional diagnostics sink

    Returns:
        A successful (2xx) response

    Raises:
        ApplicationFailure: Non-success status after retries (or non-retryable)
        ConnectionFailure: No response after retries (or non-idempotent request)
    """
    run = _RetryRun(request, policy, target=target or request.path, rng=rng, log=log)
    while True:
        response: RawResponse | None = None
        error: BaseException | None = None
        try:
            response = await send(request)
        except CONNECTION_ERRORS as e:
            error = e

        if response is not None and response.ok:
            return response

        delay = run.next_delay(response, error)
        if delay > 0:
            await sleep(delay)


def execute_with_retry_blocking(
    send: Callable[[RequestDescriptor], RawResponse],
    request: RequestDescriptor,
    policy: RetryPolicy,
    *,
    target: str | None = None,
    sleep: Callable[[float], object] = time.sleep,
    rng: random.Random | None = None,
    log: logging.Logger | None = None,
) -> RawResponse:
    """Blocking counterpart of :func:`execute_with_retry` for the thread model."""
    run = _RetryRun(request, policy, target=target or request.path, rng=rng, log=log)
    while True:
        response: RawResponse | None = None
        error: BaseException | None = None
        try:
            response = send(request)
        except CONNECTION_ERRORS as e:
            error = e

        if response is not None and response.ok:
            return response

        delay = run.next_delay(response, error)
        if delay > 0:
            sleep(delay)
