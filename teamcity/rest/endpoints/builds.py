"""Build endpoint definitions and adapters.

Covers the paged build list, the full fetch of a single build and the two
build mutations (tagging and commenting). The mutations are not
idempotent and are therefore never retried by the transport.
"""

from __future__ import annotations

from typing import Any

from teamcity.rest.core.enums import BuildField
from teamcity.rest.models import BuildBean, BuildListBean
from teamcity.rest.runtime.paging import Page
from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import decode, fields_filter, quote_segment

# Wire expression for each prefetchable build field
BUILD_FIELDS: dict[BuildField, str] = {
    BuildField.NAME: "buildType(name,projectId,projectName)",
    BuildField.PROJECT_ID: "buildType(name,projectId,projectName)",
    BuildField.PROJECT_NAME: "buildType(name,projectId,projectName)",
    BuildField.BUILD_CONFIGURATION_ID: "buildTypeId",
    BuildField.BUILD_NUMBER: "number",
    BuildField.STATUS: "status",
    BuildField.STATUS_TEXT: "statusText",
    BuildField.STATE: "state",
    BuildField.BRANCH: "branchName,defaultBranch",
    BuildField.IS_PERSONAL: "personal",
    BuildField.IS_COMPOSITE: "composite",
    BuildField.IS_FAILED_TO_START: "failedToStart",
    BuildField.QUEUED_DATETIME: "queuedDate",
    BuildField.START_DATETIME: "startDate",
    BuildField.FINISH_DATETIME: "finishDate",
    BuildField.COMMENT: "comment(*,user(id,name,username,email))",
    BuildField.PARAMETERS: "properties(*,property(*))",
    BuildField.TAGS: "tags(*,tag(*))",
    BuildField.REVISIONS: "revisions(*,revision(*))",
    BuildField.AGENT: "agent",
}

FULL_FIELDS = fields_filter(BuildField, BUILD_FIELDS)


def list_fields(fields: frozenset[BuildField]) -> str:
    return fields_filter(fields, BUILD_FIELDS, collection="build")


def _build_path(params: dict[str, Any]) -> str:
    return f"app/rest/builds/id:{quote_segment(str(params['build_id']))}"


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    return {"locator": params["locator"], "fields": list_fields(params["fields"])}


LIST_SPEC = RestEndpointSpec(
    id="builds",
    method="GET",
    build_path=lambda _params: "app/rest/builds",
    build_query=build_list_query,
)

GET_SPEC = RestEndpointSpec(
    id="build",
    method="GET",
    build_path=_build_path,
    build_query=lambda _params: {"fields": FULL_FIELDS},
)

ADD_TAG_SPEC = RestEndpointSpec(
    id="add_build_tag",
    method="POST",
    build_path=lambda params: f"{_build_path(params)}/tags/",
    build_data=lambda params: params["tag"],
    accept="text/plain",
)

SET_COMMENT_SPEC = RestEndpointSpec(
    id="set_build_comment",
    method="PUT",
    build_path=lambda params: f"{_build_path(params)}/comment/",
    build_data=lambda params: params["comment"],
    accept="text/plain",
)


class ListAdapter(ResponseAdapter):
    """Adapter for parsing a build list page."""

    def parse(self, response: Any, params: dict[str, Any]) -> Page[BuildBean]:
        bean = decode(BuildListBean, response)
        return Page(items=tuple(bean.build), next_href=bean.next_href)


class Adapter(ResponseAdapter):
    """Adapter for parsing a single full build."""

    def parse(self, response: Any, params: dict[str, Any]) -> BuildBean:
        return decode(BuildBean, response)


class NoContentAdapter(ResponseAdapter):
    """Adapter for mutations whose response body carries nothing useful."""

    def parse(self, response: Any, params: dict[str, Any]) -> None:
        return None
