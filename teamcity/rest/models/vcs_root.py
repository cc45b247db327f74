"""VCS root wire beans."""

from pydantic import Field

from .base import Bean, IdBean, PropertiesBean


class ProjectRefBean(IdBean):
    name: str | None = None


class VcsRootBean(IdBean):
    name: str | None = None
    vcs_name: str | None = Field(None, alias="vcsName")
    project: ProjectRefBean | None = None
    properties: PropertiesBean | None = None


class VcsRootListBean(Bean):
    vcs_root: list[VcsRootBean] = Field(default_factory=list, alias="vcs-root")
    next_href: str | None = Field(None, alias="nextHref")
