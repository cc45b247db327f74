"""Build resource handle."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.enums import BuildField, BuildState, BuildStatus
from ..core.exceptions import ProtocolInconsistency
from ..core.ids import BuildConfigurationId, BuildId, UserId, VcsRootId
from ..models import BuildBean
from .base import ResourceHandle, parse_datetime
from .values import Branch, BuildCommentInfo, Parameter, Revision

if TYPE_CHECKING:
    from ..api.locators import ChangeLocator
    from .build_configuration import BuildConfiguration


def _status(bean: BuildBean) -> BuildStatus | None:
    if bean.status is None:
        return None
    try:
        return BuildStatus(bean.status.upper())
    except ValueError:
        return BuildStatus.UNKNOWN


def _branch(bean: BuildBean) -> Branch:
    return Branch(name=bean.branch_name, is_default=bool(bean.default_branch))


def _comment(bean: BuildBean) -> BuildCommentInfo | None:
    comment = bean.comment
    if comment is None or comment.text is None:
        return None
    user = comment.user
    return BuildCommentInfo(
        text=comment.text,
        timestamp=parse_datetime(comment.timestamp),
        user_id=UserId(user.id) if user is not None and user.id else None,
        user_name=user.name if user is not None else None,
    )


def _parameters(bean: BuildBean) -> list[Parameter]:
    if bean.properties is None:
        return []
    return [
        Parameter(name=p.name, value=p.value, own=bool(p.own)) for p in bean.properties.property
    ]


def _revisions(bean: BuildBean) -> list[Revision]:
    if bean.revisions is None:
        return []
    result = []
    for r in bean.revisions.revision:
        root = r.vcs_root_instance
        result.append(
            Revision(
                version=r.version,
                vcs_branch_name=r.vcs_branch_name,
                vcs_root_id=VcsRootId(root.vcs_root_id) if root and root.vcs_root_id else None,
            )
        )
    return result


BUILD_GETTERS: dict[BuildField, Callable[[BuildBean], Any]] = {
    BuildField.NAME: lambda b: b.build_type.name if b.build_type else None,
    BuildField.BUILD_CONFIGURATION_ID: lambda b: (
        BuildConfigurationId(b.build_type_id) if b.build_type_id else None
    ),
    BuildField.BUILD_NUMBER: lambda b: b.number,
    BuildField.STATUS: _status,
    BuildField.STATUS_TEXT: lambda b: b.status_text,
    BuildField.STATE: lambda b: BuildState.parse(b.state),
    BuildField.BRANCH: _branch,
    BuildField.PROJECT_ID: lambda b: b.build_type.project_id if b.build_type else None,
    BuildField.PROJECT_NAME: lambda b: b.build_type.project_name if b.build_type else None,
    BuildField.IS_PERSONAL: lambda b: bool(b.personal),
    BuildField.IS_COMPOSITE: lambda b: bool(b.composite),
    BuildField.IS_FAILED_TO_START: lambda b: bool(b.failed_to_start),
    BuildField.QUEUED_DATETIME: lambda b: parse_datetime(b.queued_date),
    BuildField.START_DATETIME: lambda b: parse_datetime(b.start_date),
    BuildField.FINISH_DATETIME: lambda b: parse_datetime(b.finish_date),
    BuildField.COMMENT: _comment,
    BuildField.PARAMETERS: _parameters,
    BuildField.TAGS: lambda b: [t.name for t in b.tags.tag] if b.tags else [],
    BuildField.REVISIONS: _revisions,
    BuildField.AGENT: lambda b: b.agent.name if b.agent else None,
}


class Build(ResourceHandle[BuildBean, BuildField]):
    """A single build.

    Builds can be reused by the server (an equivalent finished build is
    substituted for a queued one), so the full fetch may legitimately
    answer with a different id.
    """

    id_type = BuildId
    field_getters: ClassVar[Mapping[Any, Callable[[Any], Any]]] = BUILD_GETTERS
    allows_id_reassignment = True

    @property
    def id(self) -> BuildId:
        return self._id  # type: ignore[return-value]

    @property
    def home_url(self) -> str:
        return self._instance.web_links.build_page(self.id)

    async def _fetch_full_bean(self) -> BuildBean:
        return await self._instance.fetch("build", {"build_id": self.id})

    async def get_name(self) -> str | None:
        return await self.get(BuildField.NAME)

    async def get_build_configuration_id(self) -> BuildConfigurationId | None:
        return await self.get(BuildField.BUILD_CONFIGURATION_ID)

    async def get_build_number(self) -> str | None:
        return await self.get(BuildField.BUILD_NUMBER)

    async def get_status(self) -> BuildStatus | None:
        return await self.get(BuildField.STATUS)

    async def get_status_text(self) -> str | None:
        return await self.get(BuildField.STATUS_TEXT)

    async def get_state(self) -> BuildState:
        return await self.get(BuildField.STATE)

    async def get_branch(self) -> Branch:
        return await self.get(BuildField.BRANCH)

    async def get_project_id(self) -> str | None:
        return await self.get(BuildField.PROJECT_ID)

    async def get_project_name(self) -> str | None:
        return await self.get(BuildField.PROJECT_NAME)

    async def is_personal(self) -> bool:
        return await self.get(BuildField.IS_PERSONAL)

    async def is_composite(self) -> bool:
        return await self.get(BuildField.IS_COMPOSITE)

    async def is_failed_to_start(self) -> bool:
        return await self.get(BuildField.IS_FAILED_TO_START)

    async def get_queued_datetime(self) -> datetime | None:
        return await self.get(BuildField.QUEUED_DATETIME)

    async def get_start_datetime(self) -> datetime | None:
        return await self.get(BuildField.START_DATETIME)

    async def get_finish_datetime(self) -> datetime | None:
        return await self.get(BuildField.FINISH_DATETIME)

    async def get_comment(self) -> BuildCommentInfo | None:
        return await self.get(BuildField.COMMENT)

    async def get_parameters(self) -> list[Parameter]:
        return await self.get(BuildField.PARAMETERS)

    async def get_tags(self) -> list[str]:
        return await self.get(BuildField.TAGS)

    async def get_revisions(self) -> list[Revision]:
        return await self.get(BuildField.REVISIONS)

    async def get_agent_name(self) -> str | None:
        return await self.get(BuildField.AGENT)

    async def get_build_configuration(self) -> BuildConfiguration:
        """Sparse handle of the configuration this build belongs to."""
        configuration_id = await self.get_build_configuration_id()
        if configuration_id is None:
            raise ProtocolInconsistency(f"Build {self.id} has no build configuration id")
        return self._instance.build_configuration(configuration_id)

    async def get_effective_id(self) -> BuildId:
        """Id the server reports for this build after a full fetch.

        Differs from ``id`` when the server answered with a reused build;
        ``id`` itself never changes so equality and hashing stay stable.
        """
        bean = await self.full_bean()
        return BuildId(bean.id) if bean.id else self.id

    def changes(self) -> ChangeLocator:
        """Query over the VCS changes included in this build."""
        return self._instance.changes().for_build(self.id)

    async def add_tag(self, tag: str) -> None:
        """Tag the build. Sent once: POST requests are never retried."""
        await self._instance.fetch("add_build_tag", {"build_id": self.id, "tag": tag})

    async def set_comment(self, comment: str) -> None:
        """Replace the build comment. Sent once: PUT requests are never retried."""
        await self._instance.fetch("set_build_comment", {"build_id": self.id, "comment": comment})
