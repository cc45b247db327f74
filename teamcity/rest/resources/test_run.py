"""Test run (test occurrence) resource handle."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.enums import TestRunField, TestStatus
from ..core.ids import BuildId, TestId, TestRunId
from ..models import TestOccurrenceBean
from .base import ResourceHandle

if TYPE_CHECKING:
    from .build import Build


def _status(bean: TestOccurrenceBean) -> TestStatus:
    if bean.ignored:
        return TestStatus.IGNORED
    if bean.status == "FAILURE":
        return TestStatus.FAILED
    if bean.status == "SUCCESS":
        return TestStatus.SUCCESSFUL
    return TestStatus.UNKNOWN


TEST_RUN_GETTERS: dict[TestRunField, Callable[[TestOccurrenceBean], Any]] = {
    TestRunField.NAME: lambda b: b.name,
    TestRunField.STATUS: _status,
    TestRunField.DURATION: lambda b: timedelta(milliseconds=b.duration or 0),
    TestRunField.DETAILS: lambda b: b.details or "",
    TestRunField.IS_IGNORED: lambda b: bool(b.ignored),
    TestRunField.IS_MUTED: lambda b: bool(b.muted),
    TestRunField.IS_NEW_FAILURE: lambda b: bool(b.new_failure),
    TestRunField.BUILD_ID: lambda b: BuildId(b.build.id) if b.build and b.build.id else None,
    TestRunField.TEST_ID: lambda b: TestId(b.test.id) if b.test and b.test.id else None,
}


class TestRun(ResourceHandle[TestOccurrenceBean, TestRunField]):
    """One execution of one test inside one build."""

    __test__ = False

    id_type = TestRunId
    field_getters: ClassVar[Mapping[Any, Callable[[Any], Any]]] = TEST_RUN_GETTERS

    @property
    def id(self) -> TestRunId:
        return self._id  # type: ignore[return-value]

    async def _fetch_full_bean(self) -> TestOccurrenceBean:
        return await self._instance.fetch("test_run", {"test_run_id": self.id})

    async def get_name(self) -> str | None:
        return await self.get(TestRunField.NAME)

    async def get_status(self) -> TestStatus:
        return await self.get(TestRunField.STATUS)

    async def get_duration(self) -> timedelta:
        return await self.get(TestRunField.DURATION)

    async def get_details(self) -> str:
        """Failure message and stack trace; empty for passed tests."""
        return await self.get(TestRunField.DETAILS)

    async def is_ignored(self) -> bool:
        return await self.get(TestRunField.IS_IGNORED)

    async def is_muted(self) -> bool:
        return await self.get(TestRunField.IS_MUTED)

    async def is_new_failure(self) -> bool:
        return await self.get(TestRunField.IS_NEW_FAILURE)

    async def get_build_id(self) -> BuildId | None:
        return await self.get(TestRunField.BUILD_ID)

    async def get_test_id(self) -> TestId | None:
        return await self.get(TestRunField.TEST_ID)

    async def get_build(self) -> Build | None:
        build_id = await self.get_build_id()
        return self._instance.build(build_id) if build_id is not None else None
