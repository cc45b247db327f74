"""TeamCity client instance.

Architecture:
    ``TeamCityInstance`` owns the retry-wrapped transport and the endpoint
    runner for one server. Resource handles and locators hold a reference
    to the instance and call back into ``fetch``/``follow``; the instance
    never tracks the handles it hands out.

    Id resolvers (``build(id)``, ``project(id)``...) are synchronous and
    network-free: they return a handle with an empty projection that
    hydrates on the first attribute read.

Design Decisions:
    - One aiohttp session per instance, created lazily by the HTTP client
    - The Authorization header is handed to the session and never logged
    - Unknown endpoint ids are a programming error (ConfigurationError)
"""

from __future__ import annotations

import logging
from typing import Any

from . import config
from .api.locators import BuildLocator, ChangeLocator, TestRunLocator, UserLocator, VcsRootLocator
from .core.exceptions import ConfigurationError
from .core.ids import BuildConfigurationId, BuildId, ChangeId, ProjectId, UserId, VcsRootId
from .core.projection import Projection
from .endpoints import get_endpoint_adapter, get_endpoint_spec
from .models import BuildBean, BuildTypeBean, ChangeBean, ProjectBean, UserBean, VcsRootBean
from .resources import ROOT_PROJECT_ID, Build, BuildConfiguration, Change, Project, User, VcsRoot
from .runtime.rest import RESTTransport, RestRunner, RetryPolicy
from .web_links import WebLinks


class TeamCityInstance:
    """Client for one TeamCity server.

    Usually created through ``TeamCityInstanceBuilder``.

    Example:
        >>> async with TeamCityInstanceBuilder("https://teamcity.example.com") \\
        ...         .with_guest_auth().build() as tc:
        ...     build = await tc.builds().include_failed().latest()
    """

    def __init__(
        self,
        server_url: str,
        *,
        url_base: str = config.GUEST_AUTH_URL_BASE,
        auth_header: str | None = None,
        timeout: float = config.DEFAULT_TIMEOUT,
        retry_policy: RetryPolicy | None = None,
        user_agent: str | None = None,
        transport: RESTTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the instance.

        Args:
            server_url: Server root, e.g. ``https://teamcity.example.com``
            url_base: Authentication url base (``/guestAuth/``, ``/httpAuth/`` or ``/``)
            auth_header: Full Authorization header value, None for guest access
            timeout: Per-request timeout in seconds
            retry_policy: Retry policy shared by every request (defaults apply if None)
            user_agent: Optional User-Agent header value
            transport: Pre-built transport (tests inject one)
            logger: Diagnostics sink; defaults to the library's module loggers
        """
        self.server_url = server_url.rstrip("/")
        self.url_base = url_base
        self.logger = logger
        self._retry_policy = retry_policy or RetryPolicy()

        if transport is None:
            headers: dict[str, str] = {}
            if auth_header is not None:
                headers["Authorization"] = auth_header
            if user_agent is not None:
                headers["User-Agent"] = user_agent
            transport = RESTTransport(
                base_url=self.server_url + url_base,
                retry_policy=self._retry_policy,
                timeout=timeout,
                headers=headers,
                logger=logger,
            )
        self._transport = transport
        self._runner = RestRunner(transport, url_base=url_base)
        self.web_links = WebLinks(self.server_url)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Run a registered endpoint and return its adapter's result.

        Raises:
            ConfigurationError: Unknown endpoint id
            TransportFailure: Request failed after the retry policy
            ProtocolInconsistency: Response did not decode
        """
        spec, adapter = self._endpoint(endpoint_id)
        return await self._runner.run(spec=spec, adapter=adapter, params=params)

    async def follow(self, endpoint_id: str, href: str, params: dict[str, Any]) -> Any:
        """Fetch the continuation page ``href`` of a collection endpoint."""
        _spec, adapter = self._endpoint(endpoint_id)
        return await self._runner.follow(href, adapter=adapter, params=params)

    def _endpoint(self, endpoint_id: str) -> tuple[Any, Any]:
        spec = get_endpoint_spec(endpoint_id)
        adapter_cls = get_endpoint_adapter(endpoint_id)
        if spec is None or adapter_cls is None:
            raise ConfigurationError(f"Unknown endpoint: {endpoint_id}")
        return spec, adapter_cls()

    # Locators

    def builds(self) -> BuildLocator:
        return BuildLocator(self)

    def test_runs(self) -> TestRunLocator:
        return TestRunLocator(self)

    def vcs_roots(self) -> VcsRootLocator:
        return VcsRootLocator(self)

    def users(self) -> UserLocator:
        return UserLocator(self)

    def changes(self) -> ChangeLocator:
        return ChangeLocator(self)

    # Id resolvers

    def build(self, build_id: BuildId) -> Build:
        return Build(BuildBean(id=build_id.string_id), Projection.empty(), self)

    def build_configuration(self, build_configuration_id: BuildConfigurationId) -> BuildConfiguration:
        return BuildConfiguration(
            BuildTypeBean(id=build_configuration_id.string_id), Projection.empty(), self
        )

    def project(self, project_id: ProjectId) -> Project:
        return Project(ProjectBean(id=project_id.string_id), Projection.empty(), self)

    def root_project(self) -> Project:
        return self.project(ProjectId(ROOT_PROJECT_ID))

    def vcs_root(self, vcs_root_id: VcsRootId) -> VcsRoot:
        return VcsRoot(VcsRootBean(id=vcs_root_id.string_id), Projection.empty(), self)

    def user(self, user_id: UserId) -> User:
        return User(UserBean(id=user_id.string_id), Projection.empty(), self)

    def change(self, change_id: ChangeId) -> Change:
        return Change(ChangeBean(id=change_id.string_id), Projection.empty(), self)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> TeamCityInstance:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"TeamCityInstance(server_url={self.server_url!r}, url_base={self.url_base!r})"
