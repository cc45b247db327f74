"""Typed resource identifiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceId:
    """Opaque, immutable identifier of a remote entity.

    Equality is by value and by kind: ``BuildId("1") != ProjectId("1")``.
    """

    string_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.string_id, str) or not self.string_id:
            raise ValueError(f"{type(self).__name__} must be a non-empty string")

    def __str__(self) -> str:
        return self.string_id


class BuildId(ResourceId):
    pass


class BuildConfigurationId(ResourceId):
    pass


class ProjectId(ResourceId):
    pass


class VcsRootId(ResourceId):
    pass


class UserId(ResourceId):
    pass


class TestId(ResourceId):
    __test__ = False


class TestRunId(ResourceId):
    __test__ = False


class ChangeId(ResourceId):
    pass
