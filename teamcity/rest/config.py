"""Client-wide defaults.

These values seed ``TeamCityInstanceBuilder``; every one of them can be
overridden per instance through the builder.
"""

from __future__ import annotations

# Read/connect timeout for a single HTTP exchange, in seconds
DEFAULT_TIMEOUT = 120.0

# Retry: three attempts with a fixed one-second delay
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_INITIAL_DELAY = 1.0
DEFAULT_RETRY_MAX_DELAY = 1.0
DEFAULT_RETRY_BACKOFF_FACTOR = 2.0
DEFAULT_RETRY_JITTER_RATIO = 0.1

# Connection pool limits handed to aiohttp.TCPConnector
DEFAULT_MAX_CONCURRENT_REQUESTS = 64
DEFAULT_MAX_CONCURRENT_REQUESTS_PER_HOST = 5

# Upper bound for the "count:" locator dimension derived from limit_results
REASONABLE_MAX_PAGE_SIZE = 1024

# Server date format, e.g. 20240131T235959+0000
DATE_FORMAT = "%Y%m%dT%H%M%S%z"

# URL prefixes selecting the authentication scheme
GUEST_AUTH_URL_BASE = "/guestAuth/"
HTTP_AUTH_URL_BASE = "/httpAuth/"
TOKEN_AUTH_URL_BASE = "/"

# Integration tests
NETWORK_TESTS_ENV = "RUN_TEAMCITY_NETWORK_TESTS"
SERVER_URL_ENV = "TEAMCITY_SERVER_URL"
