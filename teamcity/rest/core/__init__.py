"""Core components."""

from .enums import BuildField, BuildState, BuildStatus, ChangeType, TestRunField, TestStatus
from .exceptions import (
    ApplicationFailure,
    ConfigurationError,
    ConnectionFailure,
    ProtocolInconsistency,
    RemoteFetchError,
    TeamCityRestError,
    TransportFailure,
)
from .ids import (
    BuildConfigurationId,
    BuildId,
    ChangeId,
    ProjectId,
    ResourceId,
    TestId,
    TestRunId,
    UserId,
    VcsRootId,
)
from .projection import Projection

__all__ = [
    # Enums
    "BuildField",
    "BuildState",
    "BuildStatus",
    "ChangeType",
    "TestRunField",
    "TestStatus",
    # Ids
    "ResourceId",
    "BuildId",
    "BuildConfigurationId",
    "ProjectId",
    "VcsRootId",
    "UserId",
    "TestId",
    "TestRunId",
    "ChangeId",
    # Projection
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
