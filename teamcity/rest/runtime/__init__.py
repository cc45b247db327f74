"""Runtime components: transport, deferred values and pagination."""

from .lazy import BlockingSingleFlight, DeferredState, SingleFlight
from .paging import (
    Page,
    first_or_none,
    lazy_paging,
    lazy_paging_blocking,
    take,
    take_blocking,
)

__all__ = [
    "SingleFlight",
    "BlockingSingleFlight",
    "DeferredState",
    "Page",
    "lazy_paging",
    "lazy_paging_blocking",
    "take",
    "take_blocking",
    "first_or_none",
]
