"""Build configuration resource handle."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..core.ids import BuildConfigurationId, ProjectId
from ..models import BuildTypeBean
from .base import ResourceHandle
from .values import Parameter

if TYPE_CHECKING:
    from ..api.locators import BuildLocator
    from .project import Project


class BuildConfiguration(ResourceHandle[BuildTypeBean, Enum]):
    """A build configuration (``buildType`` on the wire).

    Nested references carry id, name and project id; everything else is
    read from the full bean.
    """

    id_type = BuildConfigurationId

    @property
    def id(self) -> BuildConfigurationId:
        return self._id  # type: ignore[return-value]

    def home_url(self, branch: str | None = None) -> str:
        return self._instance.web_links.build_configuration_page(self.id, branch=branch)

    async def _fetch_full_bean(self) -> BuildTypeBean:
        return await self._instance.fetch(
            "build_configuration", {"build_configuration_id": self.id}
        )

    async def get_name(self) -> str | None:
        return await self._known_or_full(lambda b: b.name)

    async def get_project_id(self) -> ProjectId | None:
        project_id = await self._known_or_full(lambda b: b.project_id)
        return ProjectId(project_id) if project_id else None

    async def get_project(self) -> Project | None:
        project_id = await self.get_project_id()
        return self._instance.project(project_id) if project_id is not None else None

    async def is_paused(self) -> bool:
        return bool((await self.full_bean()).paused)

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

    def builds(self) -> BuildLocator:
        """Build query scoped to this configuration."""
        return self._instance.builds().from_configuration(self.id)
