"""VCS root resource handle."""

from __future__ import annotations

from enum import Enum

from ..core.ids import ProjectId, VcsRootId
from ..models import VcsRootBean
from .base import ResourceHandle


class VcsRoot(ResourceHandle[VcsRootBean, Enum]):
    id_type = VcsRootId

    @property
    def id(self) -> VcsRootId:
        return self._id  # type: ignore[return-value]

    async def _fetch_full_bean(self) -> VcsRootBean:
        return await self._instance.fetch("vcs_root", {"vcs_root_id": self.id})

    async def get_name(self) -> str | None:
        return await self._known_or_full(lambda b: b.name)

    async def get_vcs_name(self) -> str | None:
        return await self._known_or_full(lambda b: b.vcs_name)

    async def get_project_id(self) -> ProjectId | None:
        project = await self._known_or_full(lambda b: b.project)
        return ProjectId(project.id) if project is not None and project.id else None

    async def get_properties(self) -> dict[str, str | None]:
        bean = await self.full_bean()
        return bean.properties.as_dict() if bean.properties is not None else {}

    async def get_url(self) -> str | None:
        return (await self.get_properties()).get("url")

    async def get_default_branch(self) -> str | None:
        return (await self.get_properties()).get("branch")
