"""VCS change resource handle."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from ..core.enums import ChangeType
from ..core.exceptions import ProtocolInconsistency
from ..core.ids import BuildConfigurationId, ChangeId, VcsRootId
from ..core.projection import Projection
from ..models import ChangeBean
from .base import ResourceHandle, parse_datetime
from .build import Build
from .user import User
from .values import ChangeFile


def _required(change: Change, name: str, value: Any) -> Any:
    if value is None:
        raise ProtocolInconsistency(f"Change {change.id} has no {name}")
    return value


class Change(ResourceHandle[ChangeBean, Enum]):
    """A commit seen by the server in one of its VCS roots."""

    id_type = ChangeId

    @property
    def id(self) -> ChangeId:
        return self._id  # type: ignore[return-value]

    def home_url(
        self,
        build_configuration_id: BuildConfigurationId | None = None,
        include_personal_builds: bool | None = None,
    ) -> str:
        return self._instance.web_links.change_page(
            self.id, build_configuration_id, include_personal_builds
        )

    async def _fetch_full_bean(self) -> ChangeBean:
        return await self._instance.fetch("change", {"change_id": self.id})

    async def get_version(self) -> str:
        return _required(self, "version", await self._known_or_full(lambda b: b.version))

    async def get_username(self) -> str:
        return _required(self, "username", await self._known_or_full(lambda b: b.username))

    async def get_comment(self) -> str:
        return _required(self, "comment", await self._known_or_full(lambda b: b.comment))

    async def get_date(self) -> datetime:
        date = _required(self, "date", await self._known_or_full(lambda b: b.date))
        return parse_datetime(date)  # type: ignore[return-value]

    async def get_registration_date(self) -> datetime | None:
        return parse_datetime(await self._known_or_full(lambda b: b.registration_date))

    async def get_user(self) -> User | None:
        """Server account of the committer, None when the username maps to no user."""
        user = await self._known_or_full(lambda b: b.user)
        if user is None or not user.id:
            return None
        return User(user, Projection.empty(), self._instance)

    async def get_vcs_root_id(self) -> VcsRootId | None:
        root = await self._known_or_full(lambda b: b.vcs_root_instance)
        if root is None or not root.vcs_root_id:
            return None
        return VcsRootId(root.vcs_root_id)

    async def get_files(self) -> list[ChangeFile]:
        files = await self._instance.fetch("change_files", {"change_id": self.id})
        return [
            ChangeFile(
                file_revision_before_change=f.before_revision,
                file_revision_after_change=f.after_revision,
                change_type=ChangeType.parse(f.change_type),
                file_path=f.file,
                relative_file_path=f.relative_file,
            )
            for f in files
        ]

    async def first_builds(self) -> list[Build]:
        """Builds that first picked up this change.

        The server computes this on a best-effort basis; the builds need not
        belong to one configuration.
        """
        beans = await self._instance.fetch("change_first_builds", {"change_id": self.id})
        return [Build(bean, Projection.empty(), self._instance) for bean in beans]
