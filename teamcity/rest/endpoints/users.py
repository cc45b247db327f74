"""User endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from teamcity.rest.models import UserBean, UserListBean
from teamcity.rest.runtime.paging import Page
from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import decode, quote_segment


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    locator = params.get("locator")
    return {"locator": locator} if locator else {}


LIST_SPEC = RestEndpointSpec(
    id="users",
    method="GET",
    build_path=lambda _params: "app/rest/users",
    build_query=build_list_query,
)

GET_SPEC = RestEndpointSpec(
    id="user",
    method="GET",
    build_path=lambda params: f"app/rest/users/id:{quote_segment(str(params['user_id']))}",
)


class ListAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> Page[UserBean]:
        bean = decode(UserListBean, response)
        return Page(items=tuple(bean.user), next_href=bean.next_href)


class Adapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> UserBean:
        return decode(UserBean, response)
