"""Fluent construction of ``TeamCityInstance``."""

from __future__ import annotations

import base64
import logging

from . import config
from .client import TeamCityInstance
from .core.exceptions import ConfigurationError
from .runtime.rest import RetryPolicy


class TeamCityInstanceBuilder:
    """Builder for a configured client instance.

    Exactly one authentication method must be chosen before ``build()``.

    Example:
        >>> instance = (TeamCityInstanceBuilder("https://teamcity.example.com")
        ...     .with_token_auth(token)
        ...     .with_timeout(30)
        ...     .with_retry(max_attempts=5, initial_delay=0.5, max_delay=4.0)
        ...     .build())
    """

    def __init__(self, server_url: str) -> None:
        if not server_url:
            raise ConfigurationError("server_url is required")
        self._server_url = server_url.rstrip("/")
        self._url_base: str | None = None
        self._auth_header: str | None = None
        self._timeout = config.DEFAULT_TIMEOUT
        self._retry_policy = RetryPolicy()
        self._user_agent: str | None = None
        self._logger: logging.Logger | None = None

    def with_guest_auth(self) -> TeamCityInstanceBuilder:
        self._url_base = config.GUEST_AUTH_URL_BASE
        self._auth_header = None
        return self

    def with_http_auth(self, username: str, password: str) -> TeamCityInstanceBuilder:
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        self._url_base = config.HTTP_AUTH_URL_BASE
        self._auth_header = f"Basic {credentials}"
        return self

    def with_token_auth(self, token: str) -> TeamCityInstanceBuilder:
        self._url_base = config.TOKEN_AUTH_URL_BASE
        self._auth_header = f"Bearer {token}"
        return self

    def with_timeout(self, seconds: float) -> TeamCityInstanceBuilder:
        if seconds <= 0:
            raise ConfigurationError(f"timeout must be positive, got {seconds}")
        self._timeout = seconds
        return self

    def with_retry(
        self,
        max_attempts: int,
        initial_delay: float,
        max_delay: float,
        *,
        backoff_factor: float = config.DEFAULT_RETRY_BACKOFF_FACTOR,
        jitter_ratio: float = config.DEFAULT_RETRY_JITTER_RATIO,
    ) -> TeamCityInstanceBuilder:
        """Replace the retry policy; delays are in seconds.

        Raises:
            ConfigurationError: Invalid policy values
        """
        self._retry_policy = RetryPolicy(
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            max_delay=max_delay,
            backoff_factor=backoff_factor,
            jitter_ratio=jitter_ratio,
        )
        return self

    def with_user_agent(self, user_agent: str) -> TeamCityInstanceBuilder:
        self._user_agent = user_agent
        return self

    def with_logger(self, logger: logging.Logger) -> TeamCityInstanceBuilder:
        self._logger = logger
        return self

    def build(self) -> TeamCityInstance:
        if self._url_base is None:
            raise ConfigurationError(
                "No authentication configured: call with_guest_auth, with_http_auth or with_token_auth"
            )
        return TeamCityInstance(
            self._server_url,
            url_base=self._url_base,
            auth_header=self._auth_header,
            timeout=self._timeout,
            retry_policy=self._retry_policy,
            user_agent=self._user_agent,
            logger=self._logger,
        )
