"""Core enumerations shared by locators, handles and wire beans.

Architecture:
    Field enums (``BuildField``, ``TestRunField``) form the closed vocabulary
    of a Projection: each member names one attribute group the server can
    return inline in a list response. Locators select a subset of members
    to prefetch, and resource handles consult that subset before deciding
    whether a full fetch is needed.

Design Decisions:
    - String enums: members double as stable, loggable tags
    - One vocabulary per entity kind: projections never mix entities
"""

from __future__ import annotations

from enum import Enum


class BuildField(str, Enum):
    """Attribute groups of a build that a list call can prefetch."""

    NAME = "name"
    BUILD_CONFIGURATION_ID = "build_configuration_id"
    BUILD_NUMBER = "build_number"
    STATUS = "status"
    STATUS_TEXT = "status_text"
    STATE = "state"
    BRANCH = "branch"
    PROJECT_ID = "project_id"
    PROJECT_NAME = "project_name"
    IS_PERSONAL = "is_personal"
    IS_COMPOSITE = "is_composite"
    IS_FAILED_TO_START = "is_failed_to_start"
    QUEUED_DATETIME = "queued_datetime"
    START_DATETIME = "start_datetime"
    FINISH_DATETIME = "finish_datetime"
    COMMENT = "comment"
    PARAMETERS = "parameters"
    TAGS = "tags"
    REVISIONS = "revisions"
    AGENT = "agent"

    @classmethod
    def default_fields(cls) -> frozenset[BuildField]:
        """Fields prefetched by a build locator unless told otherwise."""
        return frozenset(
            {
                cls.BUILD_CONFIGURATION_ID,
                cls.BUILD_NUMBER,
                cls.STATUS,
                cls.STATE,
                cls.BRANCH,
                cls.IS_PERSONAL,
                cls.IS_COMPOSITE,
            }
        )


class TestRunField(str, Enum):
    """Attribute groups of a test occurrence that a list call can prefetch."""

    __test__ = False

    NAME = "name"
    STATUS = "status"
    DURATION = "duration"
    DETAILS = "details"
    IS_IGNORED = "is_ignored"
    IS_MUTED = "is_muted"
    IS_NEW_FAILURE = "is_new_failure"
    BUILD_ID = "build_id"
    TEST_ID = "test_id"

    @classmethod
    def default_fields(cls) -> frozenset[TestRunField]:
        return frozenset({cls.NAME, cls.STATUS, cls.DURATION, cls.BUILD_ID, cls.TEST_ID})


class BuildStatus(str, Enum):
    """Build result as reported by the server."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"


class BuildState(str, Enum):
    """Lifecycle state of a build."""

    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"
    DELETED = "deleted"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> BuildState:
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


class TestStatus(str, Enum):
    """Outcome of a single test run."""

    __test__ = False

    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"
    IGNORED = "IGNORED"
    UNKNOWN = "UNKNOWN"


class ChangeType(str, Enum):
    """Kind of modification a change made to one file."""

    EDITED = "EDITED"
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    # A copied directory whose files are not listed one by one
    COPIED = "COPIED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> ChangeType:
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN
