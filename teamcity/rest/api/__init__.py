"""Query objects over server collections."""

from .locators import (
    BuildLocator,
    ChangeLocator,
    TestRunLocator,
    UserLocator,
    VcsRootLocator,
    format_locator_date,
    select_count,
)

__all__ = [
    "BuildLocator",
    "TestRunLocator",
    "ChangeLocator",
    "VcsRootLocator",
    "UserLocator",
    "select_count",
    "format_locator_date",
]
