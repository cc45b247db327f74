"""VCS change wire beans."""

from pydantic import Field

from .base import Bean, IdBean
from .build import VcsRootInstanceBean
from .user import UserBean


class ChangeBean(IdBean):
    version: str | None = None
    username: str | None = None
    user: UserBean | None = None
    date: str | None = None
    registration_date: str | None = Field(None, alias="registrationDate")
    comment: str | None = None
    vcs_root_instance: VcsRootInstanceBean | None = Field(None, alias="vcsRootInstance")


class ChangesBean(Bean):
    change: list[ChangeBean] = []
    next_href: str | None = Field(None, alias="nextHref")


class ChangeFileBean(Bean):
    before_revision: str | None = Field(None, alias="before-revision")
    after_revision: str | None = Field(None, alias="after-revision")
    change_type: str | None = Field(None, alias="changeType")
    file: str | None = None
    relative_file: str | None = Field(None, alias="relative-file")


class ChangeFileListBean(Bean):
    count: int | None = None
    file: list[ChangeFileBean] = []


class ChangeFilesBean(Bean):
    files: ChangeFileListBean | None = None
