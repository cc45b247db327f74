"""Unit tests for endpoint adapters and the endpoint registry."""

from __future__ import annotations

import pytest

from teamcity.rest.core import ProtocolInconsistency
from teamcity.rest.endpoints import get_endpoint_adapter, get_endpoint_spec, list_endpoints
from teamcity.rest.endpoints import builds, changes, projects, test_runs, users, vcs_roots
from teamcity.rest.models import (
    BuildBean,
    ChangeBean,
    ProjectBean,
    TestOccurrenceBean,
    TestOccurrencesBean,
    TestRefBean,
)
from teamcity.rest.runtime.paging import Page


class TestEndpointRegistry:
    def test_every_endpoint_registered(self):
        assert list_endpoints() == sorted(
            [
                "add_build_tag",
                "build",
                "build_configuration",
                "builds",
                "change",
                "change_files",
                "change_first_builds",
                "changes",
                "project",
                "set_build_comment",
                "test_run",
                "test_runs",
                "user",
                "users",
                "vcs_root",
                "vcs_roots",
            ]
        )

    def test_lookup(self):
        assert get_endpoint_spec("builds") is builds.LIST_SPEC
        assert get_endpoint_adapter("builds") is builds.ListAdapter

    def test_unknown(self):
        assert get_endpoint_spec("agents") is None
        assert get_endpoint_adapter("agents") is None


class TestBuildEndpoints:
    """Test build specs and adapters."""

    def test_paths(self):
        assert builds.GET_SPEC.build_path({"build_id": "123"}) == "app/rest/builds/id:123"
        assert builds.ADD_TAG_SPEC.build_path({"build_id": "1"}) == "app/rest/builds/id:1/tags/"
        assert builds.SET_COMMENT_SPEC.method == "PUT"

    def test_list_adapter(self):
        payload = {
            "count": 2,
            "nextHref": "/guestAuth/app/rest/builds?locator=count:2,start:2",
            "build": [
                {"id": 1, "buildTypeId": "Kotlin_Compiler", "number": "1.9.0-1", "status": "SUCCESS"},
                {"id": 2, "buildTypeId": "Kotlin_Compiler", "number": "1.9.0-2", "status": "FAILURE"},
            ],
        }

        page = builds.ListAdapter().parse(payload, {})

        assert isinstance(page, Page)
        assert [b.id for b in page.items] == ["1", "2"]
        assert page.items[0].build_type_id == "Kotlin_Compiler"
        assert page.next_href == "/guestAuth/app/rest/builds?locator=count:2,start:2"

    def test_last_page_has_no_continuation(self):
        page = builds.ListAdapter().parse({"build": []}, {})
        assert page.items == ()
        assert page.next_href is None

    def test_full_build(self):
        payload = {
            "id": 42,
            "branchName": "master",
            "defaultBranch": True,
            "tags": {"tag": [{"name": "release"}]},
            "revisions": {
                "revision": [
                    {"version": "abc", "vcsBranchName": "refs/heads/master", "vcs-root-instance": {"vcs-root-id": "Root"}}
                ]
            },
            "unknownField": "ignored",
        }

        bean = builds.Adapter().parse(payload, {})

        assert isinstance(bean, BuildBean)
        assert bean.id == "42"
        assert bean.tags.tag[0].name == "release"
        assert bean.revisions.revision[0].vcs_root_instance.vcs_root_id == "Root"

    def test_malformed_payload(self):
        with pytest.raises(ProtocolInconsistency):
            builds.Adapter().parse(["not", "an", "object"], {})
        with pytest.raises(ProtocolInconsistency):
            builds.Adapter().parse({"id": 1, "personal": "maybe"}, {})


class TestOtherEndpoints:
    def test_project_with_children(self):
        payload = {
            "id": "_Root",
            "name": "<Root project>",
            "projects": {"project": [{"id": "Kotlin", "name": "Kotlin", "parentProjectId": "_Root"}]},
            "buildTypes": {"buildType": [{"id": "Root_Check", "name": "Check", "projectId": "_Root"}]},
        }

        bean = projects.ProjectAdapter().parse(payload, {})

        assert isinstance(bean, ProjectBean)
        assert bean.projects.project[0].parent_project_id == "_Root"
        assert bean.build_types.build_type[0].project_id == "_Root"

    def test_vcs_root_list_uses_hyphenated_key(self):
        page = vcs_roots.ListAdapter().parse({"vcs-root": [{"id": "Root1", "name": "git"}]}, {})
        assert page.items[0].name == "git"

    def test_optional_locator(self):
        assert users.build_list_query({"locator": None}) == {}
        assert users.build_list_query({"locator": "count:5"}) == {"locator": "count:5"}

    def test_test_occurrences(self):
        payload = {
            "testOccurrence": [
                {
                    "id": "build:(id:1),id:2000",
                    "name": "FooTest.bar",
                    "status": "FAILURE",
                    "duration": 1500,
                    "currentlyMuted": False,
                    "build": {"id": 1, "buildTypeId": "X"},
                    "test": {"id": "-123", "name": "FooTest.bar"},
                }
            ]
        }

        page = test_runs.ListAdapter().parse(payload, {})

        bean = page.items[0]
        assert isinstance(bean, TestOccurrenceBean)
        assert bean.build.id == "1"
        assert bean.duration == 1500

    @pytest.mark.parametrize("bean_type", [TestOccurrenceBean, TestOccurrencesBean, TestRefBean])
    def test_test_beans_are_not_collected(self, bean_type):
        """Wire beans named Test* must not be mistaken for test classes."""
        assert bean_type.__test__ is False
        assert "__test__" not in bean_type.model_fields

    def test_test_run_path_quoted(self):
        path = test_runs.GET_SPEC.build_path({"test_run_id": "build:(id:1),id:2000"})
        assert path == "app/rest/testOccurrences/build:(id:1),id:2000"


class TestChangeEndpoints:
    def test_list_query_requests_full_beans(self):
        query = changes.build_list_query({"locator": "build:(id:5)"})
        assert query["locator"] == "build:(id:5)"
        assert query["fields"].startswith("nextHref,change(id,version,")

    def test_list_without_locator(self):
        assert "locator" not in changes.build_list_query({"locator": None})

    def test_list_adapter(self):
        payload = {
            "change": [
                {
                    "id": 42,
                    "version": "abc123",
                    "username": "alice",
                    "date": "20240131T235959+0000",
                    "vcsRootInstance": {"vcs-root-id": "Kotlin_Git", "name": "git"},
                }
            ],
            "nextHref": "/guestAuth/app/rest/changes?locator=start:1",
        }

        page = changes.ListAdapter().parse(payload, {})

        bean = page.items[0]
        assert isinstance(bean, ChangeBean)
        assert bean.id == "42"
        assert bean.vcs_root_instance.vcs_root_id == "Kotlin_Git"
        assert page.next_href == "/guestAuth/app/rest/changes?locator=start:1"

    def test_files_adapter(self):
        payload = {
            "files": {
                "count": 1,
                "file": [
                    {
                        "before-revision": "1",
                        "after-revision": "2",
                        "changeType": "edited",
                        "file": "src/a.kt",
                        "relative-file": "a.kt",
                    }
                ],
            }
        }

        files = changes.FilesAdapter().parse(payload, {})

        assert [f.relative_file for f in files] == ["a.kt"]
        assert changes.FilesAdapter().parse({}, {}) == []

    def test_paths(self):
        assert changes.GET_SPEC.build_path({"change_id": "42"}) == "app/rest/changes/id:42"
        assert (
            changes.FIRST_BUILDS_SPEC.build_path({"change_id": "42"})
            == "app/rest/changes/42/firstBuilds"
        )
