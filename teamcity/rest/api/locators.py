"""Locators: fluent, lazily executed queries over server collections.

Architecture:
    A locator accumulates filters through chainable methods and turns them
    into a server locator string (``dimension:value,...``) only when a
    traversal is started. ``all()`` returns an async iterator backed by a
    lazy paginated traversal; every call starts an independent traversal.
    Items come out as sparse resource handles whose projection is the set
    of fields the list call prefetched.

Design Decisions:
    - Filters are validated up front: a bad limit or a query without a
      scope raises ConfigurationError before any request
    - ``count:`` is derived from ``page_size`` or, failing that, from
      ``limit_results`` capped at REASONABLE_MAX_PAGE_SIZE
    - ``limit_results`` also truncates the consumed sequence, so no page
      beyond the limit is ever requested
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..config import DATE_FORMAT, REASONABLE_MAX_PAGE_SIZE
from ..core.enums import BuildField, BuildStatus, TestRunField, TestStatus
from ..core.exceptions import ConfigurationError
from ..core.ids import BuildConfigurationId, BuildId, ProjectId, TestId, VcsRootId
from ..core.projection import Projection
from ..resources import Build, Change, ResourceHandle, TestRun, User, VcsRoot
from ..runtime.paging import Page, first_or_none, lazy_paging, take
from ..runtime.telemetry import log_query

if TYPE_CHECKING:
    from ..client import TeamCityInstance

H = TypeVar("H", bound=ResourceHandle)


def select_count(limit_results: int | None, page_size: int | None) -> int | None:
    """Value of the ``count:`` locator dimension."""
    if page_size is not None:
        return page_size
    if limit_results is not None:
        return min(limit_results, REASONABLE_MAX_PAGE_SIZE)
    return None


def format_locator_date(value: datetime) -> str:
    """Format ``value`` in UTC; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(DATE_FORMAT)


def _positive(name: str, value: int) -> int:
    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


class _Locator(Generic[H]):
    """Shared traversal plumbing of the collection locators."""

    endpoint_id: str = ""
    resource: str = ""

    def __init__(self, instance: TeamCityInstance) -> None:
        self._instance = instance
        self._limit_results: int | None = None
        self._page_size: int | None = None

    def _locator(self) -> str | None:
        raise NotImplementedError

    def _params(self) -> dict[str, Any]:
        return {"locator": self._locator()}

    def _to_handle(self, bean: Any) -> H:
        raise NotImplementedError

    def all(self) -> AsyncIterator[H]:
        """Start a lazy traversal over every matching entity.

        Raises:
            ConfigurationError: If the filters are invalid (raised here,
                before any request is issued)
        """
        params = self._params()
        log_query(resource=self.resource, locator=params.get("locator"), log=self._instance.logger)
        return take(self._traverse(params), self._limit_results)

    async def first(self) -> H | None:
        return await first_or_none(self.all())

    async def _traverse(self, params: dict[str, Any]) -> AsyncIterator[H]:
        endpoint_id = self.endpoint_id

        async def fetch_first() -> Page[Any]:
            return await self._instance.fetch(endpoint_id, params)

        async def fetch_next(href: str) -> Page[Any]:
            return await self._instance.follow(endpoint_id, href, params)

        async for bean in lazy_paging(fetch_first, fetch_next, log=self._instance.logger):
            yield self._to_handle(bean)


class BuildLocator(_Locator[Build]):
    """Query over builds.

    By default only successful, finished, non-canceled builds of default
    branches are returned (the server's default filter).

    Example:
        >>> builds = (instance.builds()
        ...     .from_configuration(BuildConfigurationId("Kotlin_dev_Compiler"))
        ...     .with_branch("master")
        ...     .limit_results(10)
        ...     .all())
        >>> async for build in builds:
        ...     print(await build.get_build_number())
    """

    endpoint_id = "builds"
    resource = "Build"

    def __init__(self, instance: TeamCityInstance) -> None:
        super().__init__(instance)
        self._affected_project_id: ProjectId | None = None
        self._build_configuration_id: BuildConfigurationId | None = None
        self._snapshot_dependency_to: BuildId | None = None
        self._number: str | None = None
        self._vcs_revision: str | None = None
        self._since: datetime | None = None
        self._until: datetime | None = None
        self._status: BuildStatus | None = BuildStatus.SUCCESS
        self._tags: list[str] = []
        self._branch: str | None = None
        self._include_all_branches = False
        self._pinned_only = False
        self._personal: str | None = None
        self._running: str | None = None
        self._canceled: str | None = None
        self._agent_name: str | None = None
        self._default_filter = True
        self._fields: frozenset[BuildField] = BuildField.default_fields()

    def for_project(self, project_id: ProjectId) -> BuildLocator:
        self._affected_project_id = project_id
        return self

    def from_configuration(self, build_configuration_id: BuildConfigurationId) -> BuildLocator:
        self._build_configuration_id = build_configuration_id
        return self

    def snapshot_dependency_to(self, build_id: BuildId) -> BuildLocator:
        self._snapshot_dependency_to = build_id
        return self

    def with_number(self, build_number: str) -> BuildLocator:
        self._number = build_number
        return self

    def with_vcs_revision(self, vcs_revision: str) -> BuildLocator:
        self._vcs_revision = vcs_revision
        return self

    def include_failed(self) -> BuildLocator:
        """Drop the status filter (by default only successful builds match)."""
        self._status = None
        return self

    def with_status(self, status: BuildStatus) -> BuildLocator:
        self._status = status
        return self

    def include_running(self) -> BuildLocator:
        self._running = "any"
        return self

    def only_running(self) -> BuildLocator:
        self._running = "true"
        return self

    def include_canceled(self) -> BuildLocator:
        self._canceled = "any"
        return self

    def only_canceled(self) -> BuildLocator:
        self._canceled = "true"
        return self

    def with_tag(self, tag: str) -> BuildLocator:
        self._tags.append(tag)
        return self

    def with_branch(self, branch: str) -> BuildLocator:
        self._branch = branch
        return self

    def with_all_branches(self) -> BuildLocator:
        """Match builds from every branch; an explicit ``with_branch`` is ignored."""
        self._include_all_branches = True
        return self

    def since(self, date: datetime) -> BuildLocator:
        self._since = date
        return self

    def until(self, date: datetime) -> BuildLocator:
        self._until = date
        return self

    def with_agent(self, agent_name: str) -> BuildLocator:
        self._agent_name = agent_name
        return self

    def pinned_only(self) -> BuildLocator:
        self._pinned_only = True
        return self

    def include_personal(self) -> BuildLocator:
        self._personal = "any"
        return self

    def only_personal(self) -> BuildLocator:
        self._personal = "true"
        return self

    def default_filter(self, enable: bool) -> BuildLocator:
        self._default_filter = enable
        return self

    def prefetch_fields(self, *fields: BuildField) -> BuildLocator:
        """Replace the set of fields the list call returns inline."""
        self._fields = frozenset(fields)
        return self

    def limit_results(self, count: int) -> BuildLocator:
        self._limit_results = _positive("limit_results", count)
        return self

    def page_size(self, page_size: int) -> BuildLocator:
        self._page_size = _positive("page_size", page_size)
        return self

    async def latest(self) -> Build | None:
        """Most recent matching build, or None."""
        return await self.limit_results(1).first()

    def _locator(self) -> str:
        count = select_count(self._limit_results, self._page_size)

        if self._include_all_branches:
            branch: str | None = "branch:default:any"
        else:
            branch = f"branch:{self._branch}" if self._branch is not None else None

        parts: list[str | None] = [
            f"affectedProject:(id:{self._affected_project_id})" if self._affected_project_id else None,
            f"buildType:{self._build_configuration_id}" if self._build_configuration_id else None,
            (
                f"snapshotDependency:(to:(id:{self._snapshot_dependency_to}))"
                if self._snapshot_dependency_to
                else None
            ),
            f"number:{self._number}" if self._number is not None else None,
            f"running:{self._running}" if self._running is not None else None,
            f"canceled:{self._canceled}" if self._canceled is not None else None,
            f"revision:{self._vcs_revision}" if self._vcs_revision is not None else None,
            f"status:{self._status.value}" if self._status is not None else None,
            f"agentName:{self._agent_name}" if self._agent_name is not None else None,
            ",".join(f"tag:({tag})" for tag in self._tags) if self._tags else None,
            "pinned:true" if self._pinned_only else None,
            f"count:{count}" if count is not None else None,
            f"sinceDate:{format_locator_date(self._since)}" if self._since else None,
            f"untilDate:{format_locator_date(self._until)}" if self._until else None,
            branch,
            f"personal:{self._personal}" if self._personal is not None else None,
            # The server flips its own default between queries, so always send it
            f"defaultFilter:{str(self._default_filter).lower()}",
        ]
        return ",".join(p for p in parts if p is not None)

    def _params(self) -> dict[str, Any]:
        return {"locator": self._locator(), "fields": self._fields}

    def _to_handle(self, bean: Any) -> Build:
        return Build(bean, Projection.of(self._fields, BuildField), self._instance)


_TEST_STATUS_LOCATORS: dict[TestStatus, str] = {
    TestStatus.FAILED: "status:FAILURE",
    TestStatus.SUCCESSFUL: "status:SUCCESS",
    TestStatus.IGNORED: "ignored:true",
}


class TestRunLocator(_Locator[TestRun]):
    """Query over test runs (test occurrences).

    The server rejects unscoped test occurrence queries, so at least one of
    ``for_build``, ``for_test`` or ``for_project`` is required.
    """

    __test__ = False

    endpoint_id = "test_runs"
    resource = "TestRun"

    def __init__(self, instance: TeamCityInstance) -> None:
        super().__init__(instance)
        self._build_id: BuildId | None = None
        self._test_id: TestId | None = None
        self._affected_project_id: ProjectId | None = None
        self._status: TestStatus | None = None
        self._expand_multiple_invocations = False
        self._muted: bool | None = None
        self._currently_muted: bool | None = None
        self._fields: frozenset[TestRunField] = TestRunField.default_fields()

    def for_build(self, build_id: BuildId) -> TestRunLocator:
        self._build_id = build_id
        return self

    def for_test(self, test_id: TestId) -> TestRunLocator:
        self._test_id = test_id
        return self

    def for_project(self, project_id: ProjectId) -> TestRunLocator:
        self._affected_project_id = project_id
        return self

    def with_status(self, status: TestStatus) -> TestRunLocator:
        if status not in _TEST_STATUS_LOCATORS:
            raise ConfigurationError(f"Unsupported filter by test status {status.value}")
        self._status = status
        return self

    def muted(self, muted: bool) -> TestRunLocator:
        self._muted = muted
        return self

    def currently_muted(self, currently_muted: bool) -> TestRunLocator:
        self._currently_muted = currently_muted
        return self

    def expand_multiple_invocations(self) -> TestRunLocator:
        self._expand_multiple_invocations = True
        return self

    def prefetch_fields(self, *fields: TestRunField) -> TestRunLocator:
        self._fields = frozenset(fields)
        return self

    def limit_results(self, count: int) -> TestRunLocator:
        self._limit_results = _positive("limit_results", count)
        return self

    def page_size(self, page_size: int) -> TestRunLocator:
        self._page_size = _positive("page_size", page_size)
        return self

    def _locator(self) -> str:
        if self._build_id is None and self._test_id is None and self._affected_project_id is None:
            raise ConfigurationError(
                "Test run query needs a build, test or project scope"
            )
        count = select_count(self._limit_results, self._page_size)
        parts: list[str | None] = [
            f"count:{count}" if count is not None else None,
            f"affectedProject:{self._affected_project_id}" if self._affected_project_id else None,
            f"build:{self._build_id}" if self._build_id else None,
            f"test:{self._test_id}" if self._test_id else None,
            f"muted:{str(self._muted).lower()}" if self._muted is not None else None,
            (
                f"currentlyMuted:{str(self._currently_muted).lower()}"
                if self._currently_muted is not None
                else None
            ),
            f"expandInvocations:{str(self._expand_multiple_invocations).lower()}",
            _TEST_STATUS_LOCATORS[self._status] if self._status is not None else None,
        ]
        return ",".join(p for p in parts if p is not None)

    def _params(self) -> dict[str, Any]:
        return {"locator": self._locator(), "fields": self._fields}

    def _to_handle(self, bean: Any) -> TestRun:
        return TestRun(bean, Projection.of(self._fields, TestRunField), self._instance)


class _SimpleLocator(_Locator[H]):
    """Locator whose only filter is the result limit."""

    handle_type: Callable[..., H]

    def limit_results(self, count: int) -> Any:
        self._limit_results = _positive("limit_results", count)
        return self

    def _locator(self) -> str | None:
        count = select_count(self._limit_results, None)
        return f"count:{count}" if count is not None else None

    def _to_handle(self, bean: Any) -> H:
        return self.handle_type(bean, Projection.empty(), self._instance)


class VcsRootLocator(_SimpleLocator[VcsRoot]):
    endpoint_id = "vcs_roots"
    resource = "VcsRoot"
    handle_type = VcsRoot

    def limit_results(self, count: int) -> VcsRootLocator:
        return super().limit_results(count)


class UserLocator(_SimpleLocator[User]):
    endpoint_id = "users"
    resource = "User"
    handle_type = User

    def limit_results(self, count: int) -> UserLocator:
        return super().limit_results(count)


class ChangeLocator(_Locator[Change]):
    """Query over VCS changes, newest first.

    List pages carry every attribute a change handle serves, so the
    returned handles are already full.
    """

    endpoint_id = "changes"
    resource = "Change"

    def __init__(self, instance: TeamCityInstance) -> None:
        super().__init__(instance)
        self._build_id: BuildId | None = None
        self._build_configuration_id: BuildConfigurationId | None = None
        self._project_id: ProjectId | None = None
        self._vcs_root_id: VcsRootId | None = None
        self._username: str | None = None
        self._version: str | None = None

    def for_build(self, build_id: BuildId) -> ChangeLocator:
        self._build_id = build_id
        return self

    def from_configuration(self, build_configuration_id: BuildConfigurationId) -> ChangeLocator:
        self._build_configuration_id = build_configuration_id
        return self

    def for_project(self, project_id: ProjectId) -> ChangeLocator:
        self._project_id = project_id
        return self

    def in_vcs_root(self, vcs_root_id: VcsRootId) -> ChangeLocator:
        self._vcs_root_id = vcs_root_id
        return self

    def by_username(self, username: str) -> ChangeLocator:
        self._username = username
        return self

    def with_version(self, version: str) -> ChangeLocator:
        self._version = version
        return self

    def limit_results(self, count: int) -> ChangeLocator:
        self._limit_results = _positive("limit_results", count)
        return self

    def page_size(self, page_size: int) -> ChangeLocator:
        self._page_size = _positive("page_size", page_size)
        return self

    def _locator(self) -> str | None:
        count = select_count(self._limit_results, self._page_size)
        parts: list[str | None] = [
            f"build:(id:{self._build_id})" if self._build_id else None,
            f"buildType:(id:{self._build_configuration_id})" if self._build_configuration_id else None,
            f"project:(id:{self._project_id})" if self._project_id else None,
            f"vcsRoot:(id:{self._vcs_root_id})" if self._vcs_root_id else None,
            f"username:{self._username}" if self._username else None,
            f"version:{self._version}" if self._version else None,
            f"count:{count}" if count is not None else None,
        ]
        return ",".join(p for p in parts if p is not None) or None

    def _to_handle(self, bean: Any) -> Change:
        return Change(bean, Projection.complete(), self._instance)
