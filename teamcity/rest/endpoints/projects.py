"""Project and build configuration endpoint definitions and adapters."""

from __future__ import annotations

from typing import Any

from teamcity.rest.models import BuildTypeBean, ProjectBean
from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import decode, quote_segment

PROJECT_SPEC = RestEndpointSpec(
    id="project",
    method="GET",
    build_path=lambda params: f"app/rest/projects/id:{quote_segment(str(params['project_id']))}",
)

BUILD_CONFIGURATION_SPEC = RestEndpointSpec(
    id="build_configuration",
    method="GET",
    build_path=lambda params: (
        f"app/rest/buildTypes/id:{quote_segment(str(params['build_configuration_id']))}"
    ),
)


class ProjectAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> ProjectBean:
        return decode(ProjectBean, response)


class BuildConfigurationAdapter(ResponseAdapter):
    def parse(self, response: Any, params: dict[str, Any]) -> BuildTypeBean:
        return decode(BuildTypeBean, response)
