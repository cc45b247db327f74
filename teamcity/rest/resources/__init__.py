"""Resource handles for remote TeamCity entities."""

from .base import Full, ResourceHandle, Sparse
from .build import Build
from .build_configuration import BuildConfiguration
from .change import Change
from .project import ROOT_PROJECT_ID, Project
from .test_run import TestRun
from .user import User
from .values import Branch, BuildCommentInfo, ChangeFile, Parameter, Revision
from .vcs_root import VcsRoot

__all__ = [
    "ResourceHandle",
    "Sparse",
    "Full",
    "Build",
    "BuildConfiguration",
    "Change",
    "Project",
    "ROOT_PROJECT_ID",
    "VcsRoot",
    "User",
    "TestRun",
    "Branch",
    "Parameter",
    "Revision",
    "BuildCommentInfo",
    "ChangeFile",
]
