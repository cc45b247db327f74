"""TeamCity REST endpoint registry.

This module collects the endpoint specifications and adapters of every
resource module under one id-keyed registry.
"""

from __future__ import annotations

from teamcity.rest.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import builds, changes, projects, test_runs, users, vcs_roots

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "builds": (builds.LIST_SPEC, builds.ListAdapter),
    "build": (builds.GET_SPEC, builds.Adapter),
    "add_build_tag": (builds.ADD_TAG_SPEC, builds.NoContentAdapter),
    "set_build_comment": (builds.SET_COMMENT_SPEC, builds.NoContentAdapter),
    "project": (projects.PROJECT_SPEC, projects.ProjectAdapter),
    "build_configuration": (projects.BUILD_CONFIGURATION_SPEC, projects.BuildConfigurationAdapter),
    "vcs_roots": (vcs_roots.LIST_SPEC, vcs_roots.ListAdapter),
    "vcs_root": (vcs_roots.GET_SPEC, vcs_roots.Adapter),
    "users": (users.LIST_SPEC, users.ListAdapter),
    "user": (users.GET_SPEC, users.Adapter),
    "test_runs": (test_runs.LIST_SPEC, test_runs.ListAdapter),
    "test_run": (test_runs.GET_SPEC, test_runs.Adapter),
    "changes": (changes.LIST_SPEC, changes.ListAdapter),
    "change": (changes.GET_SPEC, changes.Adapter),
    "change_files": (changes.FILES_SPEC, changes.FilesAdapter),
    "change_first_builds": (changes.FIRST_BUILDS_SPEC, changes.FirstBuildsAdapter),
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "builds", "project")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "builds", "project")

    Returns:
        Adapter class if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    return sorted(_ENDPOINT_REGISTRY)
