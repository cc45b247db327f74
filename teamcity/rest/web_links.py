"""Browser links to server pages."""

from __future__ import annotations

from urllib.parse import quote_plus

from .core.ids import BuildConfigurationId, BuildId, ChangeId, ProjectId, UserId


class WebLinks:
    def __init__(self, server_url: str) -> None:
        self._server_url = server_url.rstrip("/")

    def build_configuration_page(
        self, configuration_id: BuildConfigurationId, branch: str | None = None
    ) -> str:
        return f"{self._server_url}/buildConfiguration/{configuration_id}" + _branch(branch)

    def build_page(
        self, build_id: BuildId, configuration_id: BuildConfigurationId | None = None
    ) -> str:
        if configuration_id is not None:
            return f"{self._server_url}/buildConfiguration/{configuration_id}/{build_id}"
        return f"{self._server_url}/build/{build_id}"

    def project_page(self, project_id: ProjectId, branch: str | None = None) -> str:
        return f"{self._server_url}/project/{project_id}" + _branch(branch)

    def user_page(self, user_id: UserId) -> str:
        return f"{self._server_url}/admin/editUser.html?userId={user_id}"

    def change_page(
        self,
        change_id: ChangeId,
        configuration_id: BuildConfigurationId | None = None,
        personal: bool | None = None,
    ) -> str:
        params = []
        if configuration_id is not None:
            params.append(f"buildTypeId={configuration_id}")
        if personal is not None:
            params.append(f"personal={str(personal).lower()}")
        query = "?" + "&".join(params) if params else ""
        return f"{self._server_url}/change/{change_id}{query}"


def _branch(branch: str | None) -> str:
    return f"?branch={quote_plus(branch)}" if branch is not None else ""
