"""Project and build configuration wire beans."""

from __future__ import annotations

from pydantic import Field

from .base import Bean, IdBean, PropertiesBean


class BuildTypeBean(IdBean):
    name: str | None = None
    project_id: str | None = Field(None, alias="projectId")
    paused: bool | None = None
    description: str | None = None
    parameters: PropertiesBean | None = None


class BuildTypesBean(Bean):
    build_type: list[BuildTypeBean] = Field(default_factory=list, alias="buildType")


class ProjectBean(IdBean):
    name: str | None = None
    description: str | None = None
    parent_project_id: str | None = Field(None, alias="parentProjectId")
    archived: bool | None = None
    parameters: PropertiesBean | None = None
    projects: ProjectsBean | None = None
    build_types: BuildTypesBean | None = Field(None, alias="buildTypes")


class ProjectsBean(Bean):
    project: list[ProjectBean] = []


ProjectBean.model_rebuild()
