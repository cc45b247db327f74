"""Unit tests for locators running against a scripted transport."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from teamcity.rest import (
    Build,
    BuildConfigurationId,
    BuildField,
    BuildId,
    BuildStatus,
    ConfigurationError,
    ProjectId,
    ProtocolInconsistency,
    TeamCityInstance,
    TestId,
    TestStatus,
)
from teamcity.rest.api import format_locator_date, select_count
from teamcity.rest.runtime.rest import RawResponse, RESTTransport


def _json(payload) -> RawResponse:
    return RawResponse(status=200, url="u", body=json.dumps(payload).encode())


def _build_page(ids, next_href=None) -> RawResponse:
    payload = {"build": [{"id": i, "number": str(i), "status": "SUCCESS"} for i in ids]}
    if next_href is not None:
        payload["nextHref"] = next_href
    return _json(payload)


@pytest.fixture
def transport():
    mock = MagicMock(spec=RESTTransport)
    mock.execute = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def instance(transport):
    return TeamCityInstance("https://tc.example.com", url_base="/guestAuth/", transport=transport)


def _requests(transport):
    return [c.args[0] for c in transport.execute.await_args_list]


class TestBuildLocatorString:
    """Test locator string construction."""

    def test_defaults(self, instance):
        assert instance.builds()._locator() == "status:SUCCESS,defaultFilter:true"

    def test_full_query(self, instance):
        locator = (
            instance.builds()
            .for_project(ProjectId("Kotlin"))
            .from_configuration(BuildConfigurationId("Kotlin_Compiler"))
            .with_number("1.9.0-1")
            .include_failed()
            .include_running()
            .with_tag("a")
            .with_tag("b")
            .with_branch("master")
            .limit_results(5000)
            .with_agent("agent-1")
            .pinned_only()
            .since(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
            .include_personal()
        )
        assert locator._locator() == (
            "affectedProject:(id:Kotlin),buildType:Kotlin_Compiler,number:1.9.0-1,running:any,"
            "agentName:agent-1,tag:(a),tag:(b),pinned:true,count:1024,"
            "sinceDate:20240102T030405+0000,branch:master,personal:any,defaultFilter:true"
        )

    def test_all_branches_overrides_branch(self, instance):
        locator = instance.builds().with_branch("feature").with_all_branches()
        assert "branch:default:any" in locator._locator()
        assert "branch:feature" not in locator._locator()

    def test_page_size_wins_over_limit(self, instance):
        locator = instance.builds().limit_results(10).page_size(3)
        assert "count:3" in locator._locator()

    def test_status_and_filters(self, instance):
        locator = (
            instance.builds()
            .with_status(BuildStatus.FAILURE)
            .snapshot_dependency_to(BuildId("9"))
            .only_canceled()
            .default_filter(False)
        )
        assert locator._locator() == (
            "snapshotDependency:(to:(id:9)),canceled:true,status:FAILURE,defaultFilter:false"
        )

    @pytest.mark.parametrize("value", [0, -1])
    def test_invalid_limits(self, instance, value):
        with pytest.raises(ConfigurationError):
            instance.builds().limit_results(value)
        with pytest.raises(ConfigurationError):
            instance.builds().page_size(value)


class TestBuildLocatorTraversal:
    """Test lazy traversal through the client."""

    @pytest.mark.asyncio
    async def test_all_follows_continuation_links(self, instance, transport):
        transport.execute.side_effect = [
            _build_page([1, 2], next_href="/guestAuth/app/rest/builds?locator=count:2,start:2"),
            _build_page([3]),
        ]

        builds = [b async for b in instance.builds().page_size(2).all()]

        assert [b.id.string_id for b in builds] == ["1", "2", "3"]
        first, second = _requests(transport)
        assert first.path == "app/rest/builds"
        assert first.params["locator"] == "status:SUCCESS,count:2,defaultFilter:true"
        assert first.params["fields"].startswith("nextHref,build(")
        assert second.path == "app/rest/builds"
        assert second.params == {"locator": "count:2,start:2"}

    @pytest.mark.asyncio
    async def test_limit_truncates_without_extra_fetch(self, instance, transport):
        """Limit 3 over pages of five fetches exactly one page."""
        transport.execute.side_effect = [
            _build_page([1, 2, 3, 4, 5], next_href="/guestAuth/app/rest/builds?start=5"),
            _build_page([6, 7, 8, 9, 10]),
        ]

        builds = [b async for b in instance.builds().limit_results(3).page_size(5).all()]

        assert len(builds) == 3
        assert transport.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_prefetched_fields_become_projection(self, instance, transport):
        transport.execute.side_effect = [_build_page([1])]

        build = await instance.builds().prefetch_fields(BuildField.STATUS).first()

        assert isinstance(build, Build)
        assert BuildField.STATUS in build.projection
        assert BuildField.BUILD_NUMBER not in build.projection
        assert await build.get_status() is BuildStatus.SUCCESS
        assert transport.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_latest(self, instance, transport):
        transport.execute.side_effect = [_build_page([42])]

        build = await instance.builds().latest()

        assert build.id == BuildId("42")
        assert "count:1" in _requests(transport)[0].params["locator"]

    @pytest.mark.asyncio
    async def test_latest_none(self, instance, transport):
        transport.execute.side_effect = [_json({"build": []})]
        assert await instance.builds().latest() is None

    @pytest.mark.asyncio
    async def test_each_all_call_is_independent(self, instance, transport):
        transport.execute.side_effect = [_build_page([1]), _build_page([1])]
        locator = instance.builds()

        assert len([b async for b in locator.all()]) == 1
        assert len([b async for b in locator.all()]) == 1
        assert transport.execute.await_count == 2


class TestTestRunLocator:
    """Test test run queries."""

    def test_scope_required(self, instance):
        with pytest.raises(ConfigurationError):
            instance.test_runs().with_status(TestStatus.FAILED).all()

    def test_unknown_status_filter_rejected(self, instance):
        with pytest.raises(ConfigurationError):
            instance.test_runs().with_status(TestStatus.UNKNOWN)

    def test_locator_string(self, instance):
        locator = (
            instance.test_runs()
            .for_build(BuildId("1"))
            .for_test(TestId("-5"))
            .muted(False)
            .with_status(TestStatus.IGNORED)
            .limit_results(10)
        )
        assert locator._locator() == (
            "count:10,build:1,test:-5,muted:false,expandInvocations:false,ignored:true"
        )

    @pytest.mark.asyncio
    async def test_all(self, instance, transport):
        transport.execute.side_effect = [
            _json({"testOccurrence": [{"id": "t1", "name": "A.b", "status": "FAILURE", "duration": 3}]})
        ]

        runs = [r async for r in instance.test_runs().for_project(ProjectId("Kotlin")).all()]

        assert len(runs) == 1
        assert await runs[0].get_status() is TestStatus.FAILED
        request = _requests(transport)[0]
        assert request.path == "app/rest/testOccurrences/"
        assert request.params["fields"].startswith("nextHref,testOccurrence(")


class TestSimpleLocators:
    @pytest.mark.asyncio
    async def test_vcs_roots(self, instance, transport):
        transport.execute.side_effect = [_json({"vcs-root": [{"id": "R1", "name": "git"}]})]

        roots = [r async for r in instance.vcs_roots().all()]

        assert await roots[0].get_name() == "git"
        assert _requests(transport)[0].params is None

    @pytest.mark.asyncio
    async def test_users_first(self, instance, transport):
        transport.execute.side_effect = [_json({"user": [{"id": 1, "username": "admin"}]})]

        user = await instance.users().limit_results(1).first()

        assert await user.get_username() == "admin"
        assert _requests(transport)[0].params == {"locator": "count:1"}


class TestChangeLocator:
    """Test the VCS change query."""

    def test_locator_string(self, instance):
        locator = (
            instance.changes()
            .from_configuration(BuildConfigurationId("Kotlin_Compiler"))
            .by_username("alice")
            .with_version("abc123")
            .limit_results(5)
        )
        assert locator._locator() == "buildType:(id:Kotlin_Compiler),username:alice,version:abc123,count:5"

    def test_unfiltered_query_has_no_locator(self, instance):
        assert instance.changes()._locator() is None

    @pytest.mark.asyncio
    async def test_build_changes_follow_pages_and_are_full(self, instance, transport):
        transport.execute.side_effect = [
            _json(
                {
                    "change": [{"id": 1, "version": "a", "username": "u", "comment": "c"}],
                    "nextHref": "/guestAuth/app/rest/changes?locator=build:(id:5),start:1",
                }
            ),
            _json({"change": [{"id": 2, "version": "b", "username": "u", "comment": "d"}]}),
        ]

        changes = [c async for c in instance.build(BuildId("5")).changes().all()]

        assert [await c.get_version() for c in changes] == ["a", "b"]
        assert all(c.is_full for c in changes)
        requests = _requests(transport)
        assert len(requests) == 2
        assert requests[0].params["locator"] == "build:(id:5)"
        assert requests[1].params == {"locator": "build:(id:5),start:1"}

    def test_invalid_page_size(self, instance):
        with pytest.raises(ConfigurationError):
            instance.changes().page_size(0)

def test_select_count():
    assert select_count(None, None) is None
    assert select_count(10, None) == 10
    assert select_count(5000, None) == 1024
    assert select_count(5000, 7) == 7


def test_format_locator_date_naive_is_utc():
    assert format_locator_date(datetime(2024, 1, 2, 3, 4, 5)) == "20240102T030405+0000"


class TestNonJsonResponses:
    """A 2xx page that is not JSON surfaces as ProtocolInconsistency."""

    @pytest.mark.asyncio
    async def test_first_on_html_page(self, instance, transport):
        transport.execute.return_value = RawResponse(status=200, url="u", body=b"<html>login</html>")

        with pytest.raises(ProtocolInconsistency):
            await instance.builds().first()

    @pytest.mark.asyncio
    async def test_hydration_on_html_page_is_memoized(self, instance, transport):
        transport.execute.return_value = RawResponse(status=200, url="u", body=b"<html>login</html>")
        build = instance.build(BuildId("1"))

        with pytest.raises(ProtocolInconsistency) as first:
            await build.get_status()
        with pytest.raises(ProtocolInconsistency) as second:
            await build.get_status()

        assert first.value is second.value
        assert transport.execute.await_count == 1
