"""Helpers shared by endpoint definitions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from teamcity.rest.core.exceptions import ProtocolInconsistency
from teamcity.rest.models import Bean

B = TypeVar("B", bound=Bean)
F = TypeVar("F", bound=Enum)


def quote_segment(value: str) -> str:
    """Percent-encode one path segment, keeping locator punctuation."""
    return quote(value, safe=":(),")


def decode(bean_type: type[B], response: Any) -> B:
    """Decode a JSON payload into ``bean_type``.

    Raises:
        ProtocolInconsistency: If the payload does not match the bean shape
    """
    if not isinstance(response, dict):
        raise ProtocolInconsistency(
            f"Invalid response format for {bean_type.__name__}: expected object, got {type(response).__name__}"
        )
    try:
        return bean_type.model_validate(response)
    except ValidationError as e:
        raise ProtocolInconsistency(f"Cannot decode {bean_type.__name__}: {e}") from e


def split_top_level(expression: str) -> list[str]:
    """Split ``a,b(c,d),e`` into ``["a", "b(c,d)", "e"]``."""
    tokens: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in expression:
        if ch == "," and depth == 0:
            tokens.append("".join(current))
            current = []
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return [t for t in tokens if t]


def fields_filter(
    fields: Iterable[F],
    field_map: Mapping[F, str],
    *,
    collection: str | None = None,
) -> str:
    """Build the ``fields`` request parameter for a set of prefetched tags.

    Top-level expressions are emitted in mapping order with duplicates
    removed; ``id`` is always included.

    Args:
        fields: Tags to prefetch
        field_map: Wire field expression per tag
        collection: Wrap as ``nextHref,<collection>(...)`` for list calls

    Returns:
        Fields filter expression
    """
    selected = set(fields)
    parts: list[str] = []
    for tag, expression in field_map.items():
        if tag not in selected:
            continue
        for token in split_top_level(expression):
            if token not in parts:
                parts.append(token)
    if "id" not in parts:
        parts.append("id")
    joined = ",".join(parts)
    if collection is None:
        return joined
    return f"nextHref,{collection}({joined})"
