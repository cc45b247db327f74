"""User wire beans."""

from pydantic import Field

from .base import Bean, IdBean


class UserBean(IdBean):
    username: str | None = None
    name: str | None = None
    email: str | None = None


class UserListBean(Bean):
    user: list[UserBean] = []
    next_href: str | None = Field(None, alias="nextHref")
