"""VCS root endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from teamcity.rest.models import VcsRootBean, VcsRootListBean
from teamcity.rest.runtime.paging import Page
from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import decode, quote_segment


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    """The locator is optional: without one the server lists every root."""
    locator = params.get("locator")
    return {"locator": locator} if locator else {}


LIST_SPEC = RestEndpointSpec(
    id="vcs_roots",
    method="GET",
    build_path=lambda _params: "app/rest/vcs-roots",
    build_query=build_list_query,
)

GET_SPEC = RestEndpointSpec(
    id="vcs_root",
    method="GET",
    build_path=lambda params: f"app/rest/vcs-roots/id:{quote_segment(str(params['vcs_root_id']))}",
)


class ListAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> Page[VcsRootBean]:
        bean = decode(VcsRootListBean, response)
        return Page(items=tuple(bean.vcs_root), next_href=bean.next_href)


class Adapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> VcsRootBean:
        return decode(VcsRootBean, response)
