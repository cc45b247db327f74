"""Project resource handle."""

from __future__ import annotations

from enum import Enum

from ..core.ids import ProjectId
from ..core.projection import Projection
from ..models import ProjectBean
from .base import ResourceHandle
from .build_configuration import BuildConfiguration
from .values import Parameter

ROOT_PROJECT_ID = "_Root"


class Project(ResourceHandle[ProjectBean, Enum]):
    """A project node of the project tree.

    Child projects and build configurations come back as nested beans of
    the full project and are exposed as sparse handles of their own.
    """

    id_type = ProjectId

    @property
    def id(self) -> ProjectId:
        return self._id  # type: ignore[return-value]

    @property
    def is_root(self) -> bool:
        return self.id.string_id == ROOT_PROJECT_ID

    def home_url(self, branch: str | None = None) -> str:
        return self._instance.web_links.project_page(self.id, branch=branch)

    async def _fetch_full_bean(self) -> ProjectBean:
        return await self._instance.fetch("project", {"project_id": self.id})

    async def get_name(self) -> str | None:
        return await self._known_or_full(lambda b: b.name)

    async def is_archived(self) -> bool:
        return bool(await self._known_or_full(lambda b: b.archived))

    async def get_parent_project_id(self) -> ProjectId | None:
        parent = await self._known_or_full(lambda b: b.parent_project_id)
        return ProjectId(parent) if parent else None

    async def get_description(self) -> str | None:
        return (await self.full_bean()).description

    async def get_parameters(self) -> list[Parameter]:
        bean = await self.full_bean()
        if bean.parameters is None:
            return []
        return [
            Parameter(name=p.name, value=p.value, own=bool(p.own))
            for p in bean.parameters.property
        ]

    async def get_child_projects(self) -> list[Project]:
        bean = await self.full_bean()
        if bean.projects is None:
            return []
        return [Project(child, Projection.empty(), self._instance) for child in bean.projects.project]

    async def get_build_configurations(self) -> list[BuildConfiguration]:
        bean = await self.full_bean()
        if bean.build_types is None:
            return []
        return [
            BuildConfiguration(child, Projection.empty(), self._instance)
            for child in bean.build_types.build_type
        ]
