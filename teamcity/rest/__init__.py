"""TeamCity REST client - lazy, retrying access to TeamCity server entities."""

from .api import BuildLocator, ChangeLocator, TestRunLocator, UserLocator, VcsRootLocator
from .builder import TeamCityInstanceBuilder
from .client import TeamCityInstance
from .core import (
    ApplicationFailure,
    BuildConfigurationId,
    BuildField,
    BuildId,
    BuildState,
    BuildStatus,
    ChangeId,
    ChangeType,
    ConfigurationError,
    ConnectionFailure,
    ProjectId,
    Projection,
    ProtocolInconsistency,
    RemoteFetchError,
    ResourceId,
    TeamCityRestError,
    TestId,
    TestRunField,
    TestRunId,
    TestStatus,
    TransportFailure,
    UserId,
    VcsRootId,
)
from .resources import (
    Branch,
    Build,
    BuildCommentInfo,
    BuildConfiguration,
    Change,
    ChangeFile,
    Parameter,
    Project,
    Revision,
    TestRun,
    User,
    VcsRoot,
)
from .runtime.rest import RetryPolicy
from .web_links import WebLinks

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "TeamCityInstance",
    "TeamCityInstanceBuilder",
    "RetryPolicy",
    "WebLinks",
    # Locators
    "BuildLocator",
    "TestRunLocator",
    "ChangeLocator",
    "VcsRootLocator",
    "UserLocator",
    # Resources
    "Build",
    "BuildConfiguration",
    "Project",
    "VcsRoot",
    "User",
    "TestRun",
    "Change",
    "ChangeFile",
    "Branch",
    "Parameter",
    "Revision",
    "BuildCommentInfo",
    # Ids and fields
    "ResourceId",
    "BuildId",
    "BuildConfigurationId",
    "ProjectId",
    "VcsRootId",
    "UserId",
    "TestId",
    "TestRunId",
    "ChangeId",
    "BuildField",
    "TestRunField",
    "BuildStatus",
    "BuildState",
    "TestStatus",
    "ChangeType",
    "Projection",
    # Exceptions
    "TeamCityRestError",
    "TransportFailure",
    "ConnectionFailure",
    "ApplicationFailure",
    "RemoteFetchError",
    "ProtocolInconsistency",
    "ConfigurationError",
]
