"""Build wire beans."""

from pydantic import Field

from .base import Bean, IdBean, PropertiesBean
from .user import UserBean


class BuildTypeRefBean(IdBean):
    name: str | None = None
    project_id: str | None = Field(None, alias="projectId")
    project_name: str | None = Field(None, alias="projectName")


class CommentBean(Bean):
    text: str | None = None
    timestamp: str | None = None
    user: UserBean | None = None


class TagBean(Bean):
    name: str
    private: bool | None = None


class TagsBean(Bean):
    tag: list[TagBean] = []


class VcsRootInstanceBean(Bean):
    vcs_root_id: str | None = Field(None, alias="vcs-root-id")
    name: str | None = None


class RevisionBean(Bean):
    version: str
    vcs_branch_name: str | None = Field(None, alias="vcsBranchName")
    vcs_root_instance: VcsRootInstanceBean | None = Field(None, alias="vcs-root-instance")


class RevisionsBean(Bean):
    revision: list[RevisionBean] = []


class AgentRefBean(IdBean):
    name: str | None = None


class BuildBean(IdBean):
    """Build as returned by ``/app/rest/builds``; every field is optional."""

    build_type_id: str | None = Field(None, alias="buildTypeId")
    build_type: BuildTypeRefBean | None = Field(None, alias="buildType")
    number: str | None = None
    status: str | None = None
    status_text: str | None = Field(None, alias="statusText")
    state: str | None = None
    branch_name: str | None = Field(None, alias="branchName")
    default_branch: bool | None = Field(None, alias="defaultBranch")
    personal: bool | None = None
    composite: bool | None = None
    failed_to_start: bool | None = Field(None, alias="failedToStart")
    queued_date: str | None = Field(None, alias="queuedDate")
    start_date: str | None = Field(None, alias="startDate")
    finish_date: str | None = Field(None, alias="finishDate")
    comment: CommentBean | None = None
    properties: PropertiesBean | None = None
    tags: TagsBean | None = None
    revisions: RevisionsBean | None = None
    agent: AgentRefBean | None = None


class BuildListBean(Bean):
    build: list[BuildBean] = []
    next_href: str | None = Field(None, alias="nextHref")
