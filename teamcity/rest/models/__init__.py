"""Wire beans decoded from server JSON."""

from .base import Bean, IdBean, PropertiesBean, PropertyBean
from .build import (
    AgentRefBean,
    BuildBean,
    BuildListBean,
    BuildTypeRefBean,
    CommentBean,
    RevisionBean,
    RevisionsBean,
    TagBean,
    TagsBean,
    VcsRootInstanceBean,
)
from .change import ChangeBean, ChangeFileBean, ChangeFileListBean, ChangeFilesBean, ChangesBean
from .project import BuildTypeBean, BuildTypesBean, ProjectBean, ProjectsBean
from .test_run import BuildRefBean, TestOccurrenceBean, TestOccurrencesBean, TestRefBean
from .user import UserBean, UserListBean
from .vcs_root import ProjectRefBean, VcsRootBean, VcsRootListBean

__all__ = [
    "Bean",
    "IdBean",
    "PropertyBean",
    "PropertiesBean",
    "AgentRefBean",
    "BuildBean",
    "BuildListBean",
    "BuildTypeRefBean",
    "CommentBean",
    "RevisionBean",
    "RevisionsBean",
    "TagBean",
    "TagsBean",
    "VcsRootInstanceBean",
    "ChangeBean",
    "ChangesBean",
    "ChangeFileBean",
    "ChangeFileListBean",
    "ChangeFilesBean",
    "BuildTypeBean",
    "BuildTypesBean",
    "ProjectBean",
    "ProjectsBean",
    "BuildRefBean",
    "TestOccurrenceBean",
    "TestOccurrencesBean",
    "TestRefBean",
    "UserBean",
    "UserListBean",
    "ProjectRefBean",
    "VcsRootBean",
    "VcsRootListBean",
]
