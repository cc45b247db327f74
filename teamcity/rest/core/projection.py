"""Field projections: which attributes a list/search call already supplied.

A projection is attached to every resource handle when it is created. An
attribute whose tag is inside the projection is served from the bean the
handle was created with; any other attribute requires the handle's full
representation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Generic, TypeVar

F = TypeVar("F", bound=Enum)


class Projection(Generic[F]):
    """Immutable set of satisfied attribute tags, or the special "complete" value."""

    __slots__ = ("_fields", "_complete")

    def __init__(self, fields: Iterable[F] = (), *, complete: bool = False) -> None:
        self._fields: frozenset[F] = frozenset(fields)
        self._complete = complete

    @classmethod
    def empty(cls) -> Projection[F]:
        """Id-only projection: every attribute read needs hydration."""
        return cls()

    @classmethod
    def complete(cls) -> Projection[F]:
        """All tags satisfied: the handle never hydrates."""
        return cls(complete=True)

    @classmethod
    def of(cls, fields: Iterable[F], vocabulary: type[F]) -> Projection[F]:
        """Build a projection, collapsing to complete when it covers the vocabulary.

        Args:
            fields: Tags supplied by the producing call
            vocabulary: Enum class listing every tag of the entity

        Returns:
            Projection over ``fields``
        """
        selected = frozenset(fields)
        if selected >= frozenset(vocabulary):
            return cls.complete()
        return cls(selected)

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def fields(self) -> frozenset[F]:
        return self._fields

    def __contains__(self, field: object) -> bool:
        return self._complete or field in self._fields

    def __iter__(self) -> Iterator[F]:
        return iter(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Projection):
            return NotImplemented
        return self._complete == other._complete and self._fields == other._fields

    def __hash__(self) -> int:
        return hash((self._complete, self._fields))

    def __repr__(self) -> str:
        if self._complete:
            return "Projection(complete)"
        names = sorted(getattr(f, "name", str(f)) for f in self._fields)
        return f"Projection({', '.join(names)})"
