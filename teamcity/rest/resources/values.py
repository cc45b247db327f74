"""Immutable value objects returned by resource handle accessors."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ChangeType
from ..core.ids import UserId, VcsRootId


@dataclass(frozen=True)
class Branch:
    name: str | None
    is_default: bool


@dataclass(frozen=True)
class Parameter:
    name: str
    value: str | None
    own: bool


@dataclass(frozen=True)
class Revision:
    """VCS revision a build was run on."""

    version: str
    vcs_branch_name: str | None
    vcs_root_id: VcsRootId | None


@dataclass(frozen=True)
class BuildCommentInfo:
    text: str
    timestamp: datetime | None
    user_id: UserId | None
    user_name: str | None


@dataclass(frozen=True)
class ChangeFile:
    """One file touched by a VCS change.

    Attributes:
        file_path: Full path, may include the VCS url
        relative_file_path: Path relative to the VCS root directory
    """

    file_revision_before_change: str | None
    file_revision_after_change: str | None
    change_type: ChangeType
    file_path: str | None
    relative_file_path: str | None
