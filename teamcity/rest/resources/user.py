"""User resource handle."""

from __future__ import annotations

from enum import Enum

from ..core.ids import UserId
from ..models import UserBean
from .base import ResourceHandle


class User(ResourceHandle[UserBean, Enum]):
    id_type = UserId

    @property
    def id(self) -> UserId:
        return self._id  # type: ignore[return-value]

    @property
    def home_url(self) -> str:
        return self._instance.web_links.user_page(self.id)

    async def _fetch_full_bean(self) -> UserBean:
        return await self._instance.fetch("user", {"user_id": self.id})

    async def get_username(self) -> str | None:
        return await self._known_or_full(lambda b: b.username)

    async def get_name(self) -> str | None:
        return await self._known_or_full(lambda b: b.name)

    async def get_email(self) -> str | None:
        return await self._known_or_full(lambda b: b.email)
