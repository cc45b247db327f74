"""Single-flight deferred values.

A deferred value wraps a producer and runs it at most once, no matter how
many callers ask for the value concurrently. The first caller starts the
computation, every caller (the first included) waits for that one
computation, and later callers get the memoized outcome. A failed
computation is memoized too: every later call re-raises the same
exception object. Retrying belongs inside the producer (the transport's
retry policy), never here.

State machine: ``NOT_STARTED -> IN_PROGRESS -> COMPLETED``, no way back.

Two flavours share that contract:
    - ``SingleFlight``: cooperative (asyncio) model
    - ``BlockingSingleFlight``: thread model
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class DeferredState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SingleFlight(Generic[T]):
    """Memoizing async cell whose producer runs at most once.

    The check-and-set that elects the first caller runs under a per-cell
    lock and creates a task for the producer. All callers await that task
    through ``asyncio.shield``: a caller that gets cancelled stops waiting
    but does not cancel the shared computation.
    """

    def __init__(self, producer: Callable[[], Awaitable[T]]) -> None:
        self._producer = producer
        self._lock = threading.Lock()
        self._task: asyncio.Future[T] | None = None

    @property
    def state(self) -> DeferredState:
        task = self._task
        if task is None:
            return DeferredState.NOT_STARTED
        if not task.done():
            return DeferredState.IN_PROGRESS
        return DeferredState.COMPLETED

    @property
    def is_completed(self) -> bool:
        return self.state is DeferredState.COMPLETED

    async def get_value(self) -> T:
        task = self._task
        if task is None:
            with self._lock:
                if self._task is None:
                    self._task = asyncio.ensure_future(self._run())
                task = self._task
        if task.done():
            return task.result()
        return await asyncio.shield(task)

    async def _run(self) -> T:
        return await self._producer()


class BlockingSingleFlight(Generic[T]):
    """Thread-model counterpart of :class:`SingleFlight`.

    The per-cell lock is held while the producer runs, so concurrent
    callers block until the single computation has finished.
    """

    def __init__(self, producer: Callable[[], T]) -> None:
        self._producer = producer
        self._lock = threading.Lock()
        self._state = DeferredState.NOT_STARTED
        self._value: T | None = None
        self._error: BaseException | None = None

    @property
    def state(self) -> DeferredState:
        return self._state

    @property
    def is_completed(self) -> bool:
        return self._state is DeferredState.COMPLETED

    def get_value(self) -> T:
        if self._state is not DeferredState.COMPLETED:
            with self._lock:
                if self._state is DeferredState.NOT_STARTED:
                    self._state = DeferredState.IN_PROGRESS
                    try:
                        self._value = self._producer()
                    except BaseException as e:
                        self._error = e
                    self._state = DeferredState.COMPLETED
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]
