"""VCS change endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from teamcity.rest.models import (
    BuildBean,
    BuildListBean,
    ChangeBean,
    ChangeFileBean,
    ChangeFilesBean,
    ChangesBean,
)
from teamcity.rest.runtime.paging import Page
from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import decode, quote_segment

# Every attribute a change handle serves; list pages carry full beans
CHANGE_FIELDS = "id,version,username,user,date,registrationDate,comment,vcsRootInstance"


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    query: dict[str, Any] = {"fields": f"nextHref,change({CHANGE_FIELDS})"}
    if params.get("locator"):
        query["locator"] = params["locator"]
    return query


def _change_path(params: dict[str, Any]) -> str:
    return f"app/rest/changes/id:{quote_segment(str(params['change_id']))}"


LIST_SPEC = RestEndpointSpec(
    id="changes",
    method="GET",
    build_path=lambda _params: "app/rest/changes",
    build_query=build_list_query,
)

GET_SPEC = RestEndpointSpec(
    id="change",
    method="GET",
    build_path=_change_path,
    build_query=lambda _params: {"fields": CHANGE_FIELDS},
)

FILES_SPEC = RestEndpointSpec(
    id="change_files",
    method="GET",
    build_path=_change_path,
    build_query=lambda _params: {"fields": "files"},
)

FIRST_BUILDS_SPEC = RestEndpointSpec(
    id="change_first_builds",
    method="GET",
    build_path=lambda params: f"app/rest/changes/{quote_segment(str(params['change_id']))}/firstBuilds",
)


class ListAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> Page[ChangeBean]:
        bean = decode(ChangesBean, response)
        return Page(items=tuple(bean.change), next_href=bean.next_href)


class Adapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> ChangeBean:
        return decode(ChangeBean, response)


class FilesAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> list[ChangeFileBean]:
        bean = decode(ChangeFilesBean, response)
        return list(bean.files.file) if bean.files is not None else []


class FirstBuildsAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> list[BuildBean]:
        return list(decode(BuildListBean, response).build)
