"""Shared fixtures for integration tests."""

import os

import pytest

from teamcity.rest import TeamCityInstanceBuilder
from teamcity.rest.config import NETWORK_TESTS_ENV, SERVER_URL_ENV

# Skip all integration tests unless RUN_TEAMCITY_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get(NETWORK_TESTS_ENV) != "1",
    reason=f"Requires network access. Set {NETWORK_TESTS_ENV}=1 to run",
)


@pytest.fixture
def teamcity():
    """Guest-auth instance against TEAMCITY_SERVER_URL (public JetBrains server by default).

    Tests enter it with ``async with`` so the session is closed on their loop.
    """
    server_url = os.environ.get(SERVER_URL_ENV, "https://teamcity.jetbrains.com")
    return TeamCityInstanceBuilder(server_url).with_guest_auth().build()
