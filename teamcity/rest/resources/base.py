"""Resource handles: partially-known remote entities that hydrate once.

Architecture:
    A handle is created from whatever bean the producing call returned (a
    list page, a nested reference, or just an id) together with the
    Projection that call satisfied. Its state is a two-case union:
    - ``Sparse(bean, projection)``: attributes inside the projection are
      served from ``bean``; any other attribute needs the full bean
    - ``Full(bean)``: everything is served locally

    The move from Sparse to Full happens exactly once, inside a
    per-handle ``SingleFlight`` that performs the type-specific full fetch
    through the client's retry-wrapped transport. Concurrent readers share
    that single fetch; a failed fetch is memoized and re-raised on every
    later read.

Design Decisions:
    - Handles point at the client, the client never tracks handles
    - No public mutation: the only state change is the hydration above
    - Handles refuse to be pickled: they carry a live client capability
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ..config import DATE_FORMAT
from ..core.exceptions import ProtocolInconsistency, RemoteFetchError, TransportFailure
from ..core.ids import ResourceId
from ..core.projection import Projection
from ..models import IdBean
from ..runtime.lazy import DeferredState, SingleFlight
from ..runtime.telemetry import log_hydration

if TYPE_CHECKING:
    from ..client import TeamCityInstance

B = TypeVar("B", bound=IdBean)
F = TypeVar("F", bound=Enum)


@dataclass(frozen=True)
class Sparse(Generic[B, F]):
    bean: B
    projection: Projection[F]


@dataclass(frozen=True)
class Full(Generic[B]):
    bean: B


def parse_datetime(value: str | None) -> datetime | None:
    """Parse a server timestamp such as ``20240131T235959+0000``."""
    if value is None:
        return None
    return datetime.strptime(value, DATE_FORMAT)


class ResourceHandle(ABC, Generic[B, F]):
    """Client-side representative of one remote entity.

    Subclasses declare ``id_type`` and ``field_getters`` (one getter per
    projection tag) and implement ``_fetch_full_bean``.
    """

    id_type: ClassVar[type[ResourceId]] = ResourceId
    field_getters: ClassVar[Mapping[Any, Callable[[Any], Any]]] = {}
    # Entities whose identity the server may legitimately reassign on full fetch
    allows_id_reassignment: ClassVar[bool] = False

    def __init__(
        self, bean: B, projection: Projection[F], instance: TeamCityInstance
    ) -> None:
        if bean.id is None:
            raise ProtocolInconsistency(f"{type(self).__name__} bean has no id")
        self._id = self.id_type(bean.id)
        self._instance = instance
        self._state: Sparse[B, F] | Full[B] = (
            Full(bean) if projection.is_complete else Sparse(bean, projection)
        )
        self._full = SingleFlight(self._hydrate)

    @property
    def id(self) -> ResourceId:
        return self._id

    @property
    def is_full(self) -> bool:
        return isinstance(self._state, Full)

    @property
    def projection(self) -> Projection[F]:
        state = self._state
        return Projection.complete() if isinstance(state, Full) else state.projection

    @property
    def hydration_state(self) -> DeferredState:
        return self._full.state

    async def get(self, field: F) -> Any:
        """Read one attribute, hydrating the handle first if the projection lacks it.

        Args:
            field: Projection tag of the attribute

        Returns:
            Attribute value (None when the server has no value)

        Raises:
            RemoteFetchError: Full fetch failed after retries
            ProtocolInconsistency: Full fetch returned another entity
        """
        getter = self.field_getters.get(field)
        if getter is None:
            raise ValueError(f"{type(self).__name__} has no field {field!r}")
        state = self._state
        if isinstance(state, Full) or field in state.projection:
            return getter(state.bean)
        return getter(await self.full_bean())

    async def _known_or_full(self, getter: Callable[[B], Any]) -> Any:
        """Serve ``getter`` from the known bean, falling back to the full bean on None."""
        value = getter(self._state.bean)
        if value is not None or self.is_full:
            return value
        return getter(await self.full_bean())

    async def full_bean(self) -> B:
        state = self._state
        if isinstance(state, Full):
            return state.bean
        return await self._full.get_value()

    async def _hydrate(self) -> B:
        kind = type(self).__name__
        start = perf_counter()
        try:
            full = await self._fetch_full_bean()
        except TransportFailure as e:
            log_hydration(
                resource=kind,
                resource_id=str(self._id),
                outcome=type(e).__name__,
                log=self._instance.logger,
            )
            raise RemoteFetchError(self._id, e) from e

        if not self.allows_id_reassignment and full.id != self._id.string_id:
            log_hydration(
                resource=kind,
                resource_id=str(self._id),
                outcome=ProtocolInconsistency.__name__,
                log=self._instance.logger,
            )
            raise ProtocolInconsistency(
                f"Incorrect full bean fetched: current '{self._id}' != fetched '{full.id}'"
            )

        self._state = Full(full)
        log_hydration(
            resource=kind,
            resource_id=str(self._id),
            outcome="ok",
            latency_ms=(perf_counter() - start) * 1000.0,
            log=self._instance.logger,
        )
        return full

    @abstractmethod
    async def _fetch_full_bean(self) -> B:
        """Fetch the full representation through the client transport."""

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return (
            self._id == other._id  # type: ignore[attr-defined]
            and self._instance.server_url == other._instance.server_url  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), self._id, self._instance.server_url))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id.string_id!r})"

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise TypeError(f"{type(self).__name__} handles cannot be serialized")
